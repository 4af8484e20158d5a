"""Core configuration.

Why here:
- Centralizes environment variables and the TOML config file
  (pydantic-settings) without leaking that concern into the CLI.
- Gives the API client one consistent contract for token, endpoint and
  timeouts.

Precedence: explicit kwargs > `NJALLA_*` env vars > `.env` > `config.toml`.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from core.domain.exceptions import ConfigError, MissingCredentialError

API_ENDPOINT = "https://njal.la/api/1/"
CONFIG_FILE = Path("config.toml")
TOKEN_ENV_VAR = "NJALLA_API_TOKEN"

_CONFIG_TEMPLATE = """# Njalla CLI Configuration
# Get your API token from: https://njal.la/settings/api/

api_token = ""
"""


def get_user_config_dir() -> Path:
    """Per-user config directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "njalla-cli"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "njalla-cli"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "njalla-cli"
    return Path.home() / ".config" / "njalla-cli"


def get_user_config_file() -> Path:
    return get_user_config_dir() / "config.toml"


def config_template() -> str:
    return _CONFIG_TEMPLATE


def write_config_template(path: Path = CONFIG_FILE) -> bool:
    """Write the starter config file.

    Returns False (and leaves the file untouched) when it already exists.
    """

    if path.exists():
        return False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(_CONFIG_TEMPLATE, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to write config file: {exc}") from exc
    return True


def mask_token(token: str) -> str:
    if len(token) > 8:
        return f"{token[:4]}...{token[-4:]}"
    return "****"


def token_source() -> str:
    return "env" if os.environ.get(TOKEN_ENV_VAR) else "config file"


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed and validated at the edge (env vars, TOML) so the client only
      ever sees clean values.
    - One configuration contract shared by the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="NJALLA_",
        extra="ignore",
        case_sensitive=False,
        env_ignore_empty=True,
        env_file=".env",
        env_file_encoding="utf-8",
        # Later files win: the project-local config overrides the user one.
        toml_file=(get_user_config_file(), CONFIG_FILE),
    )

    api_token: str | None = Field(
        default=None,
        repr=False,
        description="Njalla API token (Authorization: Njalla <token>).",
    )
    api_url: str = Field(
        default=API_ENDPOINT,
        min_length=8,
        description="JSON-RPC endpoint of the Njalla API.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    poll_interval_seconds: float = Field(
        default=2.0,
        gt=0,
        description="Delay between check-task polls while waiting for a registration.",
    )
    user_agent: str = Field(
        default="njalla-cli/0.1",
        min_length=1,
        description="User-Agent sent with every API request.",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    def require_token(self) -> str:
        """Return the configured token or raise `MissingCredentialError`."""

        token = (self.api_token or "").strip()
        if not token:
            raise MissingCredentialError()
        return token


def load_settings(**overrides: object) -> AppSettings:
    """Build `AppSettings`, turning unreadable config files into `ConfigError`."""

    try:
        return AppSettings(**overrides)
    except ValueError as exc:
        raise ConfigError(f"Failed to parse config file: {exc}") from exc
