"""Output format options for the CLI.

Kept in the domain layer so the CLI, the renderers and the JSON exporter
share one source of truth without importing each other.
"""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Supported output renderings."""

    TABLE = "table"
    JSON = "json"

    @classmethod
    def default(cls) -> "OutputFormat":
        """Return the default format used across the application."""

        return cls.TABLE
