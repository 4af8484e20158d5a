"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation of API payloads at the edge, with self-documenting
  fields, without coupling the core to HTTP.
- `model_dump(mode="json")` gives the JSON output mode for free.

Note:
- These models describe *what* the API returns, not *how* it is fetched.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.records import RecordType

T = TypeVar("T")


class ApiRequest(BaseModel):
    """JSON-RPC style request body: `{"method": ..., "params": {...}}`."""

    method: str = Field(..., min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)


class ApiErrorBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str


class ApiEnvelope(BaseModel, Generic[T]):
    """Wire-level response wrapper.

    Exactly one of `result`/`error` is expected; both absent is a protocol
    violation handled by the client, not here.
    """

    model_config = ConfigDict(extra="ignore")

    result: T | None = None
    error: ApiErrorBody | None = None


class MarketDomain(BaseModel):
    """Availability and pricing from `find-domains`."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    status: str = Field(
        ...,
        description="'available', 'taken', 'in progress', 'failed', ...",
    )
    price: int = Field(..., ge=0, description="Price in EUR per year.")

    @property
    def is_available(self) -> bool:
        return self.status == "available"


class Domain(BaseModel):
    """Domain owned by the account (`list-domains`, `get-domain`)."""

    model_config = ConfigDict(extra="ignore")

    name: str
    status: str
    expiry: datetime | None = None
    locked: bool | None = None
    mailforwarding: bool | None = None
    max_nameservers: int | None = None


class Record(BaseModel):
    """DNS record as returned by the API."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str
    # Types this client cannot create (DS, new ones...) are kept as plain strings.
    record_type: RecordType | str = Field(..., alias="type", union_mode="left_to_right")
    content: str | None = None
    ttl: int | None = None
    priority: int | None = Field(default=None, alias="prio")
    weight: int | None = None
    port: int | None = None
    target: str | None = None
    value: str | None = None
    ssh_algorithm: int | None = None
    ssh_type: int | None = None

    @property
    def type_name(self) -> str:
        if isinstance(self.record_type, RecordType):
            return self.record_type.value
        return self.record_type


class TaskStatus(BaseModel):
    """Server-side asynchronous task (`check-task`)."""

    model_config = ConfigDict(extra="ignore")

    id: str
    status: str = Field(..., description="'pending', 'processing', 'completed', 'failed'.")


class PaymentMethod(str, Enum):
    """Supported wallet refill methods."""

    BITCOIN = "bitcoin"


class WalletBalance(BaseModel):
    model_config = ConfigDict(extra="ignore")

    balance: int = Field(..., description="Wallet balance in EUR.")


class Payment(BaseModel):
    """Wallet refill (`add-payment`, `get-payment`)."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    amount: int
    address: str | None = None
    status: str | None = None
    uri: str | None = None
    amount_btc: str | None = None


class Transaction(BaseModel):
    """Wallet transaction from the last 90 days."""

    model_config = ConfigDict(extra="ignore")

    id: str
    amount: int
    status: str
    completed: str | None = None
    pdf: str | None = None
    uri: str | None = None
    address: str | None = None
    currency: str | None = None
    amount_btc: str | None = None


# Result payloads (what sits under `result`).


class DomainsResult(BaseModel):
    domains: list[Domain] = Field(default_factory=list)


class MarketDomainsResult(BaseModel):
    domains: list[MarketDomain] = Field(default_factory=list)


class RecordsResult(BaseModel):
    records: list[Record] = Field(default_factory=list)


class RegisterResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    task: str = Field(..., min_length=1, description="Task id to poll with check-task.")


class TransactionsResult(BaseModel):
    transactions: list[Transaction] = Field(default_factory=list)


class ValidationChecks(BaseModel):
    exists: bool = False
    status_active: bool = False
    has_expiry: bool = False
    dns_accessible: bool = False

    def all_passed(self) -> bool:
        return self.exists and self.status_active and self.has_expiry and self.dns_accessible


class ValidationResult(BaseModel):
    """Outcome of checking that a domain was properly registered."""

    domain: str
    valid: bool
    checks: ValidationChecks
    domain_info: Domain | None = None
    dns_records: list[Record] | None = None
    error: str | None = None
