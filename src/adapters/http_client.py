"""httpx wrapper.

Why a wrapper:
- Standardizes timeout, headers and auth for every API call.
- Makes testing easy: a `transport` (e.g. `httpx.MockTransport`) can be
  injected instead of the network.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_client(
    settings: AppSettings | None = None,
    *,
    token: str,
    timeout: float | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` with safe defaults for the Njalla API.

    Why a builder:
    - Centralizes timeout/headers so every call behaves the same.
    - The token goes into the default headers once, and never into logs.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "Authorization": f"Njalla {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": settings.user_agent,
    }
    return httpx.Client(
        timeout=httpx.Timeout(timeout if timeout is not None else settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
