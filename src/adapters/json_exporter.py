"""JSON rendering of API models.

Why JSON:
- `--output json` makes every command scriptable (jq, pipelines).
- Uses the API's own field names (`type`, `prio`) so output can be fed
  back into other tools.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel


def to_jsonable(value: Any) -> Any:
    """Convert models (or lists/dicts of models) to plain JSON types."""

    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def dumps(value: Any) -> str:
    """Pretty, UTF-8 friendly JSON with stable key order."""

    return json.dumps(to_jsonable(value), ensure_ascii=False, indent=2)
