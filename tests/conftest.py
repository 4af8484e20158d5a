"""
Shared test fixtures.

This module provides pytest fixtures for:
- Isolated settings (no real token, no real config file)
- `NjallaClient` instances wired to `httpx.MockTransport`
- A scripted fake gateway for workflow tests
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from adapters.njalla_client import NjallaClient
from core.config import AppSettings
from core.domain.exceptions import NjallaError
from core.domain.models import Domain, MarketDomain, Record, TaskStatus

API_URL = "https://api.test/1/"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Run every test in an empty directory without NJALLA_* variables."""

    for key in ("NJALLA_API_TOKEN", "NJALLA_API_URL", "NJALLA_POLL_INTERVAL_SECONDS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(api_token="test-token", api_url=API_URL, http_timeout_seconds=5)


class ApiRecorder:
    """MockTransport handler that records requests and replays responses."""

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


def envelope(result: Any = None, error: str | None = None, status_code: int = 200) -> httpx.Response:
    payload: dict[str, Any] = {}
    if result is not None:
        payload["result"] = result
    if error is not None:
        payload["error"] = {"message": error}
    return httpx.Response(status_code, json=payload)


@pytest.fixture
def make_client(settings: AppSettings) -> Callable[..., NjallaClient]:
    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> NjallaClient:
        return NjallaClient(
            "test-token",
            settings=settings,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return _make


class FakeGateway:
    """Scripted `ApiGateway` that counts calls per method."""

    def __init__(
        self,
        market: list[MarketDomain] | None = None,
        *,
        task_id: str = "task-abc123",
        task_statuses: list[str] | None = None,
        register_error: NjallaError | None = None,
        poll_error: NjallaError | None = None,
        domain: Domain | None = None,
        records: list[Record] | None = None,
        domain_error: NjallaError | None = None,
        records_error: NjallaError | None = None,
    ) -> None:
        self.market = market or []
        self.task_id = task_id
        self.task_statuses = list(task_statuses or ["pending"])
        self.register_error = register_error
        self.poll_error = poll_error
        self.domain = domain
        self.records = records or []
        self.domain_error = domain_error
        self.records_error = records_error
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    def __enter__(self) -> "FakeGateway":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def find_domains(self, query: str) -> list[MarketDomain]:
        self.calls.append(("find-domains", (query,)))
        return self.market

    def register_domain(self, domain: str, years: int) -> str:
        self.calls.append(("register-domain", (domain, years)))
        if self.register_error:
            raise self.register_error
        return self.task_id

    def check_task(self, task_id: str) -> TaskStatus:
        self.calls.append(("check-task", (task_id,)))
        if self.poll_error:
            raise self.poll_error
        # Last scripted status repeats forever.
        status = self.task_statuses.pop(0) if len(self.task_statuses) > 1 else self.task_statuses[0]
        return TaskStatus(id=task_id, status=status)

    def get_domain(self, domain: str) -> Domain:
        self.calls.append(("get-domain", (domain,)))
        if self.domain_error:
            raise self.domain_error
        assert self.domain is not None
        return self.domain

    def list_records(self, domain: str) -> list[Record]:
        self.calls.append(("list-records", (domain,)))
        if self.records_error:
            raise self.records_error
        return self.records


class FakeClock:
    """Monotonic clock that only advances when `sleep` is called."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def market(name: str = "example.com", status: str = "available", price: int = 15) -> list[MarketDomain]:
    return [MarketDomain(name=name, status=status, price=price)]
