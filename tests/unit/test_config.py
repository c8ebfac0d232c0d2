"""Tests for quickcal configuration loading."""

from __future__ import annotations

import pytest

from quickcal.config import DEFAULT_MODEL, ConfigError, load_settings


class TestLoadSettingsHappyPath:
    """Tests for successful configuration loading."""

    def test_load_settings_with_api_key(self, monkeypatch_env: dict[str, str]) -> None:
        """GEMINI_API_KEY alone is enough; everything else has defaults."""
        settings = load_settings()

        assert settings.gemini_api_key == "test-gemini-key-12345"
        assert settings.gemini_model == DEFAULT_MODEL
        assert settings.log_level == "INFO"
        assert settings.timezone is None

    def test_load_settings_custom_model(
        self, monkeypatch_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """GEMINI_MODEL overrides the default model."""
        monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-flash")

        assert load_settings().gemini_model == "gemini-2.5-flash"

    def test_load_settings_custom_log_level(
        self, monkeypatch_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """LOG_LEVEL=DEBUG is honoured."""
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        assert load_settings().log_level == "DEBUG"

    def test_load_settings_custom_timezone(
        self, monkeypatch_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """TIMEZONE=America/New_York is honoured."""
        monkeypatch.setenv("TIMEZONE", "America/New_York")

        assert load_settings().timezone == "America/New_York"

    def test_blank_optional_values_use_defaults(
        self, monkeypatch_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Whitespace-only optional variables fall back to defaults."""
        monkeypatch.setenv("TIMEZONE", "   ")
        monkeypatch.setenv("GEMINI_MODEL", "")

        settings = load_settings()

        assert settings.timezone is None
        assert settings.gemini_model == DEFAULT_MODEL


class TestLoadSettingsMissingVars:
    """Tests for missing or blank API keys."""

    def test_load_settings_missing_gemini_api_key(self, clean_env: None) -> None:
        """Missing GEMINI_API_KEY raises ConfigError naming the variable."""
        with pytest.raises(ConfigError, match="GEMINI_API_KEY"):
            load_settings()

    def test_load_settings_whitespace_only_key(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Whitespace-only GEMINI_API_KEY raises ConfigError."""
        monkeypatch.setenv("GEMINI_API_KEY", "   ")

        with pytest.raises(ConfigError, match="GEMINI_API_KEY"):
            load_settings()


class TestSettingsDataclass:
    """Tests for the Settings dataclass behaviour."""

    def test_settings_repr_masks_api_key(self, monkeypatch_env: dict[str, str]) -> None:
        """repr(settings) must NOT leak the actual API key."""
        text = repr(load_settings())

        assert "test-gemini-key-12345" not in text
        assert "***" in text
        assert "timezone=None" in text

    def test_settings_is_frozen(self, monkeypatch_env: dict[str, str]) -> None:
        """Mutating a field on a frozen dataclass must raise."""
        settings = load_settings()

        with pytest.raises(AttributeError):
            settings.timezone = "Europe/Berlin"  # type: ignore[misc]
