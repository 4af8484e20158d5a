"""Domain registration workflow.

This module owns the one stateful process of the CLI: checking that a
domain is available, confirming the price with the operator, submitting
the registration and (optionally) polling the server-side task until it
completes, fails or the caller's timeout expires.

Printing and prompting stay in the CLI layer; this module only talks to
an `ApiGateway` and reports progress through `RegistrationHooks`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from core.domain.exceptions import (
    DomainNotAvailableError,
    RegistrationFailedError,
    RegistrationTimeoutError,
)
from core.domain.models import MarketDomain, TaskStatus
from core.interfaces.gateway import ApiGateway

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 2.0
DEFAULT_TIMEOUT_SECONDS = 300
MIN_YEARS = 1
MAX_YEARS = 10

_UNAVAILABLE_REASONS: dict[str, str] = {
    "taken": "{domain} is already registered",
    "in progress": "{domain} registration is already in progress",
    "failed": "{domain} registration previously failed",
}


class RegistrationStatus(str, Enum):
    """Successful terminal states. Failures are raised, not returned."""

    CANCELLED = "cancelled"
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True)
class RegistrationRequest:
    """Parameters of one registration attempt."""

    domain: str
    years: int = 1
    skip_confirmation: bool = False
    wait: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if not self.domain.strip():
            raise ValueError("domain must not be empty")
        if not MIN_YEARS <= self.years <= MAX_YEARS:
            raise ValueError(f"years must be between {MIN_YEARS} and {MAX_YEARS} (got {self.years})")
        if self.timeout_seconds < 0:
            raise ValueError("timeout_seconds must not be negative")


@dataclass(frozen=True)
class RegistrationQuote:
    """Price information gathered while checking availability."""

    domain: str
    years: int
    price_per_year: int

    @property
    def total_price(self) -> int:
        return self.price_per_year * self.years


@dataclass
class RegistrationHooks:
    """Optional callbacks for UI layers (progress messages)."""

    on_quote: Callable[[RegistrationQuote], None] | None = None
    on_submitted: Callable[[str], None] | None = None
    on_waiting: Callable[[str], None] | None = None
    on_poll: Callable[[TaskStatus, int], None] | None = None


@dataclass
class RegistrationOutcome:
    """Output of a registration that did not fail."""

    status: RegistrationStatus
    quote: RegistrationQuote
    task_id: str | None = None
    polls: int = 0
    elapsed_seconds: float = 0.0

    @property
    def domain(self) -> str:
        return self.quote.domain

    def to_dict(self) -> dict[str, Any]:
        """Stable payload for the JSON output mode."""

        payload: dict[str, Any] = {"domain": self.domain, "status": self.status.value}
        if self.task_id is not None:
            payload["task_id"] = self.task_id
        payload["years"] = self.quote.years
        payload["price_per_year"] = self.quote.price_per_year
        payload["total_price"] = self.quote.total_price
        return payload


def unavailable_reason(domain: str, status: str) -> str:
    """Human reason for a market status other than `available`."""

    template = _UNAVAILABLE_REASONS.get(status)
    if template is None:
        return f"{domain} is not available (status: {status})"
    return template.format(domain=domain)


def find_exact_match(domain: str, results: list[MarketDomain]) -> MarketDomain | None:
    for candidate in results:
        if candidate.name == domain:
            return candidate
    return None


def read_confirmation(quote: RegistrationQuote) -> bool:
    """Default stdin confirmation; only a case-insensitive `y` proceeds."""

    print(
        f"Domain: {quote.domain}\n"
        f"Price: {quote.price_per_year} EUR/year\n"
        f"Years: {quote.years}\n"
        f"Total: {quote.total_price} EUR\n"
    )
    try:
        answer = input("Proceed with registration? [y/N] ")
    except EOFError:
        return False
    return is_affirmative(answer)


def is_affirmative(answer: str | None) -> bool:
    return (answer or "").strip().lower() == "y"


class RegistrationOrchestrator:
    """Drive one registration to a terminal outcome.

    States: checking -> awaiting confirmation -> submitting -> polling.
    Each step is a single attempt; any gateway error ends the workflow.
    `clock` and `sleep` are injectable so tests do not wait in real time.
    """

    def __init__(
        self,
        gateway: ApiGateway,
        *,
        confirm: Callable[[RegistrationQuote], bool] | None = None,
        hooks: RegistrationHooks | None = None,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._gateway = gateway
        self._confirm = confirm or read_confirmation
        self._hooks = hooks or RegistrationHooks()
        self._poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    def check(self, request: RegistrationRequest) -> RegistrationQuote:
        """Availability check; raises `DomainNotAvailableError`."""

        results = self._gateway.find_domains(request.domain)
        match = find_exact_match(request.domain, results)
        if match is None:
            raise DomainNotAvailableError(f"{request.domain} not found in search results")
        if not match.is_available:
            raise DomainNotAvailableError(unavailable_reason(request.domain, match.status))

        quote = RegistrationQuote(domain=request.domain, years=request.years, price_per_year=match.price)
        logger.info(
            "%s available at %s EUR/year, total %s EUR for %s year(s)",
            quote.domain,
            quote.price_per_year,
            quote.total_price,
            quote.years,
        )
        if self._hooks.on_quote:
            self._hooks.on_quote(quote)
        return quote

    def run(self, request: RegistrationRequest) -> RegistrationOutcome:
        quote = self.check(request)

        if not request.skip_confirmation and not self._confirm(quote):
            logger.info("registration of %s cancelled by operator", request.domain)
            return RegistrationOutcome(status=RegistrationStatus.CANCELLED, quote=quote)

        task_id = self._gateway.register_domain(request.domain, request.years)
        logger.info("registration of %s submitted as task %s", request.domain, task_id)
        if self._hooks.on_submitted:
            self._hooks.on_submitted(task_id)

        if not request.wait:
            return RegistrationOutcome(status=RegistrationStatus.PENDING, quote=quote, task_id=task_id)

        return self._poll(request, quote, task_id)

    def _poll(self, request: RegistrationRequest, quote: RegistrationQuote, task_id: str) -> RegistrationOutcome:
        if self._hooks.on_waiting:
            self._hooks.on_waiting(task_id)

        start = self._clock()
        polls = 0
        while True:
            elapsed = self._clock() - start
            if elapsed > request.timeout_seconds:
                logger.warning(
                    "gave up waiting for %s after %.1fs (%d polls); task %s keeps running",
                    request.domain,
                    elapsed,
                    polls,
                    task_id,
                )
                raise RegistrationTimeoutError(request.domain, request.timeout_seconds, task_id)

            task = self._gateway.check_task(task_id)
            polls += 1
            logger.debug("task %s poll #%d: %s", task_id, polls, task.status)
            if self._hooks.on_poll:
                self._hooks.on_poll(task, polls)

            if task.status == "completed":
                return RegistrationOutcome(
                    status=RegistrationStatus.COMPLETED,
                    quote=quote,
                    task_id=task_id,
                    polls=polls,
                    elapsed_seconds=self._clock() - start,
                )
            if task.status == "failed":
                raise RegistrationFailedError(request.domain, task_id)

            # pending, processing or anything unrecognized
            self._sleep(self._poll_interval)


def register_domain(
    gateway: ApiGateway,
    domain: str,
    years: int = 1,
    *,
    skip_confirmation: bool = False,
    wait: bool = False,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    confirm: Callable[[RegistrationQuote], bool] | None = None,
    hooks: RegistrationHooks | None = None,
    poll_interval: float = POLL_INTERVAL_SECONDS,
) -> RegistrationOutcome:
    """Caller-facing entry point: one call, one outcome or one typed error."""

    request = RegistrationRequest(
        domain=domain,
        years=years,
        skip_confirmation=skip_confirmation,
        wait=wait,
        timeout_seconds=timeout_seconds,
    )
    orchestrator = RegistrationOrchestrator(gateway, confirm=confirm, hooks=hooks, poll_interval=poll_interval)
    return orchestrator.run(request)
