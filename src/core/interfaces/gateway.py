"""API gateway contract.

Why Protocol:
- Structural typing: the real `NjallaClient` and the fakes used in tests
  satisfy it without inheriting from anything.
- Keeps the registration workflow free of HTTP details.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Domain, MarketDomain, Record, TaskStatus


@runtime_checkable
class ApiGateway(Protocol):
    """Minimal surface the services need from the API client.

    Design rules:
    - One method per remote call; each performs exactly one request.
    - Failures are raised as `NjallaError` subclasses, never returned.
    """

    def find_domains(self, query: str) -> list[MarketDomain]:
        """Search the market for `query` (`find-domains`)."""

        ...

    def register_domain(self, domain: str, years: int) -> str:
        """Submit a registration and return the task id (`register-domain`)."""

        ...

    def check_task(self, task_id: str) -> TaskStatus:
        """Read the current state of a task (`check-task`)."""

        ...

    def get_domain(self, domain: str) -> Domain:
        ...

    def list_records(self, domain: str) -> list[Record]:
        ...
