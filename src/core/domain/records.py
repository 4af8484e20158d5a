"""DNS record variants.

Each record type gets its own model with exactly the fields it accepts,
so `add-record` params are built from a typed value instead of
conditionally mutating a dict. `record_wire_params` is the single pure
mapping from a variant to the API's field names.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter
from pydantic.config import ConfigDict


class RecordType(str, Enum):
    A = "A"
    AAAA = "AAAA"
    ANAME = "ANAME"
    CAA = "CAA"
    CNAME = "CNAME"
    DYNAMIC = "Dynamic"
    HTTPS = "HTTPS"
    MX = "MX"
    NAPTR = "NAPTR"
    NS = "NS"
    PTR = "PTR"
    SRV = "SRV"
    SSHFP = "SSHFP"
    SVCB = "SVCB"
    TLSA = "TLSA"
    TXT = "TXT"


# Wire order; `priority` travels as `prio`.
_WIRE_FIELDS: tuple[tuple[str, str], ...] = (
    ("content", "content"),
    ("ttl", "ttl"),
    ("priority", "prio"),
    ("weight", "weight"),
    ("port", "port"),
    ("target", "target"),
    ("value", "value"),
    ("ssh_algorithm", "ssh_algorithm"),
    ("ssh_type", "ssh_type"),
)


class _RecordBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1, description="Record name, e.g. '@' or 'www'.")
    ttl: int | None = Field(default=None, gt=0)


class SimpleRecord(_RecordBase):
    """Name + content records (A, AAAA, CNAME, TXT, ...)."""

    type: Literal["A", "AAAA", "ANAME", "CAA", "CNAME", "NAPTR", "NS", "PTR", "TLSA", "TXT"]
    content: str = Field(..., min_length=1)


class MxRecord(_RecordBase):
    type: Literal["MX"]
    content: str = Field(..., min_length=1)
    priority: int = Field(..., ge=0)


class SrvRecord(_RecordBase):
    type: Literal["SRV"]
    content: str = Field(..., min_length=1)
    priority: int = Field(..., ge=0)
    weight: int = Field(..., ge=0)
    port: int = Field(..., ge=0, le=65535)


class ServiceBindingRecord(_RecordBase):
    """HTTPS / SVCB records (RFC 9460)."""

    type: Literal["HTTPS", "SVCB"]
    priority: int = Field(..., ge=0)
    target: str = Field(..., min_length=1)
    value: str | None = Field(default=None, description="SvcParams, e.g. 'alpn=h2,h3'.")


class SshfpRecord(_RecordBase):
    type: Literal["SSHFP"]
    content: str = Field(..., min_length=1, description="Fingerprint (hex).")
    ssh_algorithm: int = Field(..., ge=1, le=5, description="RSA, DSA, ECDSA, Ed25519, XMSS.")
    ssh_type: int = Field(..., ge=1, le=2, description="SHA-1, SHA-256.")


class DynamicRecord(_RecordBase):
    """Dynamic DNS record; the API assigns the content."""

    type: Literal["Dynamic"]


RecordSpec = Annotated[
    Union[SimpleRecord, MxRecord, SrvRecord, ServiceBindingRecord, SshfpRecord, DynamicRecord],
    Field(discriminator="type"),
]

_RECORD_SPEC_ADAPTER: TypeAdapter[RecordSpec] = TypeAdapter(RecordSpec)


class RecordChanges(BaseModel):
    """Partial update for `edit-record`; unset fields are left untouched."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str | None = None
    content: str | None = None
    ttl: int | None = Field(default=None, gt=0)
    priority: int | None = Field(default=None, ge=0)
    weight: int | None = Field(default=None, ge=0)
    port: int | None = Field(default=None, ge=0, le=65535)
    target: str | None = None
    value: str | None = None
    ssh_algorithm: int | None = Field(default=None, ge=1, le=5)
    ssh_type: int | None = Field(default=None, ge=1, le=2)

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


def _optional_fields(source: BaseModel) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for attr, wire_name in _WIRE_FIELDS:
        value = getattr(source, attr, None)
        if value is not None:
            out[wire_name] = value
    return out


def record_wire_params(domain: str, spec: RecordSpec) -> dict[str, Any]:
    """`add-record` params for a record variant, omitting unset optionals."""

    params: dict[str, Any] = {"domain": domain, "type": spec.type, "name": spec.name}
    params.update(_optional_fields(spec))
    return params


def edit_wire_params(domain: str, record_id: str, changes: RecordChanges) -> dict[str, Any]:
    """`edit-record` params: identity first, then only the changed fields."""

    params: dict[str, Any] = {"domain": domain, "id": record_id}
    if changes.name is not None:
        params["name"] = changes.name
    params.update(_optional_fields(changes))
    return params


def build_record_spec(
    record_type: RecordType | str,
    name: str,
    *,
    content: str | None = None,
    ttl: int | None = None,
    priority: int | None = None,
    weight: int | None = None,
    port: int | None = None,
    target: str | None = None,
    value: str | None = None,
    ssh_algorithm: int | None = None,
    ssh_type: int | None = None,
) -> RecordSpec:
    """Turn flat CLI flags into the matching record variant.

    Raises `pydantic.ValidationError` (a `ValueError`) when a flag the type
    needs is missing or a flag the type does not accept is given.
    """

    kind = RecordType(record_type).value
    raw: dict[str, Any] = {
        "type": kind,
        "name": name,
        "content": content,
        "ttl": ttl,
        "priority": priority,
        "weight": weight,
        "port": port,
        "target": target,
        "value": value,
        "ssh_algorithm": ssh_algorithm,
        "ssh_type": ssh_type,
    }
    return _RECORD_SPEC_ADAPTER.validate_python({k: v for k, v in raw.items() if v is not None})
