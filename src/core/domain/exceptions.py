"""Domain exceptions - semantic error types for the Njalla client.

Every failure the CLI can surface derives from `NjallaError`, so the
entry point can render one actionable line and map it to an exit code.
"""

from __future__ import annotations


class NjallaError(Exception):
    """Base class for all client errors."""

    pass


class MissingCredentialError(NjallaError):
    """No API token configured (env var or config file)."""

    def __init__(self) -> None:
        super().__init__(
            "No API token found. Set NJALLA_API_TOKEN or add api_token to ./config.toml"
        )


class ConfigError(NjallaError):
    """Config file exists but cannot be read, parsed or written."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Config error: {message}")


class TransportError(NjallaError):
    """Connection, TLS or timeout failure before a response body arrived."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Request failed: {detail}")


class DecodeError(NjallaError):
    """Response body is not JSON or does not match the expected shape."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Failed to parse response: {detail}")


class ApiRejectedError(NjallaError):
    """The API answered with `error.message`."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"API error: {message}")


class EmptyResultError(ApiRejectedError):
    """Envelope carried neither `result` nor `error`."""

    def __init__(self) -> None:
        super().__init__("Missing result in response")


class RegistrationFailedError(ApiRejectedError):
    """The registration task reached the `failed` state."""

    def __init__(self, domain: str, task_id: str) -> None:
        self.domain = domain
        self.task_id = task_id
        super().__init__(f"Registration failed for {domain} (task {task_id})")


class DomainNotAvailableError(NjallaError):
    """Domain cannot be registered (taken, in progress, not found...)."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Domain not available: {reason}")


class RegistrationTimeoutError(NjallaError):
    """Waiting for the registration task exceeded the caller's timeout.

    The task keeps running server-side; there is no cancel call.
    """

    def __init__(self, domain: str, timeout_secs: float, task_id: str | None = None) -> None:
        self.domain = domain
        self.timeout_secs = timeout_secs
        self.task_id = task_id
        shown = f"{timeout_secs:g}" if timeout_secs % 1 else str(int(timeout_secs))
        super().__init__(f"Registration timeout for {domain} after {shown}s")
