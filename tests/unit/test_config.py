"""
Unit tests for settings loading.

Verifies token precedence (env over config file), empty values, masking
and the starter config file.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import (
    API_ENDPOINT,
    AppSettings,
    load_settings,
    mask_token,
    token_source,
    write_config_template,
)
from core.domain.exceptions import ConfigError, MissingCredentialError


class TestTokenSources:
    def test_defaults_without_token(self) -> None:
        settings = AppSettings()

        assert settings.api_token is None
        assert settings.api_url == API_ENDPOINT
        assert settings.http_timeout_seconds == 30.0
        assert settings.poll_interval_seconds == 2.0

    def test_token_from_config_file(self) -> None:
        Path("config.toml").write_text('api_token = "from-file"\n', encoding="utf-8")

        assert AppSettings().require_token() == "from-file"

    def test_env_overrides_config_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        Path("config.toml").write_text('api_token = "from-file"\n', encoding="utf-8")
        monkeypatch.setenv("NJALLA_API_TOKEN", "from-env")

        assert AppSettings().require_token() == "from-env"
        assert token_source() == "env"

    def test_empty_env_does_not_override_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        Path("config.toml").write_text('api_token = "from-file"\n', encoding="utf-8")
        monkeypatch.setenv("NJALLA_API_TOKEN", "")

        assert AppSettings().require_token() == "from-file"
        assert token_source() == "config file"

    def test_missing_token_raises(self) -> None:
        with pytest.raises(MissingCredentialError):
            AppSettings().require_token()

    def test_empty_token_in_file_counts_as_missing(self) -> None:
        Path("config.toml").write_text('api_token = ""\n', encoding="utf-8")

        with pytest.raises(MissingCredentialError):
            AppSettings().require_token()

    def test_token_hidden_from_repr(self) -> None:
        settings = AppSettings(api_token="super-secret-token")

        assert "super-secret-token" not in repr(settings)

    def test_malformed_config_file_is_config_error(self) -> None:
        Path("config.toml").write_text("api_token = \n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_settings()


class TestMaskToken:
    def test_long_token_keeps_edges(self) -> None:
        assert mask_token("abcd1234efgh5678") == "abcd...5678"

    def test_short_token_fully_masked(self) -> None:
        assert mask_token("abcdefgh") == "****"


class TestConfigTemplate:
    def test_creates_template(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"

        assert write_config_template(path) is True
        assert 'api_token = ""' in path.read_text(encoding="utf-8")

    def test_never_overwrites(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('api_token = "keep-me"\n', encoding="utf-8")

        assert write_config_template(path) is False
        assert "keep-me" in path.read_text(encoding="utf-8")
