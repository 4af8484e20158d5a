"""Njalla API client.

Responsibility:
- Turn a `(method, params)` pair into one authenticated POST.
- Classify the outcome: transport failure, undecodable body, API-reported
  error, empty envelope, or a validated result.
- Expose one typed method per remote call used by the CLI and services.

The client holds only the token, the endpoint and an `httpx.Client`; it
never retries and never caches.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError
from rich.console import Console

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.exceptions import (
    ApiRejectedError,
    DecodeError,
    EmptyResultError,
    TransportError,
)
from core.domain.models import (
    ApiEnvelope,
    ApiRequest,
    Domain,
    DomainsResult,
    MarketDomain,
    MarketDomainsResult,
    Payment,
    PaymentMethod,
    Record,
    RecordsResult,
    RegisterResult,
    TaskStatus,
    Transaction,
    TransactionsResult,
    WalletBalance,
)
from core.domain.records import RecordChanges, RecordSpec, edit_wire_params, record_wire_params

logger = logging.getLogger(__name__)

_RAW_ENVELOPE: TypeAdapter[ApiEnvelope[Any]] = TypeAdapter(ApiEnvelope[Any])

MAX_PAYMENT_EUR = 300


def validate_payment_amount(amount: int) -> int:
    """Wallet refills are 5 EUR or a multiple of 15 EUR, up to 300."""

    if amount == 5 or (0 < amount <= MAX_PAYMENT_EUR and amount % 15 == 0):
        return amount
    raise ValueError(f"amount must be 5 or a multiple of 15 up to {MAX_PAYMENT_EUR} (got {amount})")


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


class NjallaClient:
    """Authenticated gateway to the Njalla JSON-RPC endpoint."""

    def __init__(
        self,
        token: str,
        *,
        settings: AppSettings | None = None,
        base_url: str | None = None,
        debug: bool = False,
        transport: httpx.BaseTransport | None = None,
        debug_console: Console | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._base_url = base_url or self._settings.api_url
        self._debug = debug
        self._debug_console = debug_console or Console(stderr=True, highlight=False, soft_wrap=True)
        self._http = build_client(self._settings, token=token, transport=transport)

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        debug: bool = False,
        transport: httpx.BaseTransport | None = None,
    ) -> "NjallaClient":
        """Build a client from settings; raises `MissingCredentialError` without a token."""

        return cls(settings.require_token(), settings=settings, debug=debug, transport=transport)

    def __enter__(self) -> "NjallaClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _trace(self, line: str) -> None:
        # Raw write; rich rendering would expand tabs and drop CRs.
        if self._debug:
            stream = self._debug_console.file
            stream.write(line + "\n")
            stream.flush()

    def call(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        result_model: type[BaseModel] | None = None,
    ) -> Any:
        """Perform one API call and return the (validated) `result`.

        Raises, in precedence order: `TransportError`, `DecodeError`,
        `ApiRejectedError`, `EmptyResultError`. When `result_model` is None
        the raw JSON result is returned.
        """

        body = ApiRequest(method=method, params=params or {}).model_dump_json()
        self._trace(f"[DEBUG] Request: {method} {body}")

        try:
            response = self._http.post(self._base_url, content=body)
        except httpx.RequestError as exc:
            logger.debug("transport failure on %s: %r", method, exc)
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        text = response.text
        self._trace(f"[DEBUG] Response: {text}")
        logger.debug("%s -> HTTP %s (%d bytes)", method, response.status_code, len(text))

        try:
            envelope = _RAW_ENVELOPE.validate_json(text)
        except ValidationError as exc:
            raise DecodeError(f"HTTP {response.status_code}: {_first_error(exc)}") from exc

        if envelope.error is not None:
            raise ApiRejectedError(envelope.error.message)
        if envelope.result is None:
            raise EmptyResultError()
        if result_model is None:
            return envelope.result

        try:
            return result_model.model_validate(envelope.result)
        except ValidationError as exc:
            raise DecodeError(f"{method}: {_first_error(exc)}") from exc

    # Domains

    def list_domains(self) -> list[Domain]:
        result: DomainsResult = self.call("list-domains", {}, DomainsResult)
        return result.domains

    def get_domain(self, domain: str) -> Domain:
        return self.call("get-domain", {"domain": domain}, Domain)

    def find_domains(self, query: str) -> list[MarketDomain]:
        result: MarketDomainsResult = self.call("find-domains", {"query": query}, MarketDomainsResult)
        return result.domains

    # Registration

    def register_domain(self, domain: str, years: int) -> str:
        result: RegisterResult = self.call(
            "register-domain", {"domain": domain, "years": years}, RegisterResult
        )
        return result.task

    def check_task(self, task_id: str) -> TaskStatus:
        return self.call("check-task", {"id": task_id}, TaskStatus)

    # DNS

    def list_records(self, domain: str) -> list[Record]:
        result: RecordsResult = self.call("list-records", {"domain": domain}, RecordsResult)
        return result.records

    def add_record(self, domain: str, record: RecordSpec) -> Record:
        return self.call("add-record", record_wire_params(domain, record), Record)

    def edit_record(self, domain: str, record_id: str, changes: RecordChanges) -> Record:
        return self.call("edit-record", edit_wire_params(domain, record_id, changes), Record)

    def remove_record(self, domain: str, record_id: str) -> None:
        self.call("remove-record", {"domain": domain, "id": record_id})

    # Wallet

    def get_balance(self) -> WalletBalance:
        return self.call("get-balance", {}, WalletBalance)

    def add_payment(self, amount: int, via: PaymentMethod) -> Payment:
        validate_payment_amount(amount)
        return self.call("add-payment", {"amount": amount, "via": PaymentMethod(via).value}, Payment)

    def get_payment(self, payment_id: str) -> Payment:
        return self.call("get-payment", {"id": payment_id}, Payment)

    def list_transactions(self) -> list[Transaction]:
        result: TransactionsResult = self.call("list-transactions", {}, TransactionsResult)
        return result.transactions
