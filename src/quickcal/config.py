"""Configuration loading for quickcal.

Reads settings from environment variables (with .env support via
python-dotenv) and validates that all required values are present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-2.0-flash"


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        gemini_api_key: API key for Google Gemini.
        gemini_model: Gemini model identifier used for extraction.
        log_level: Logging level (default ``"INFO"``).
        timezone: IANA timezone used as the reference timezone when the
            caller does not supply one.  ``None`` means the system local
            zone is used.
    """

    gemini_api_key: str
    gemini_model: str = DEFAULT_MODEL
    log_level: str = "INFO"
    timezone: str | None = None

    def __repr__(self) -> str:
        return (
            f"Settings(gemini_api_key='***', "
            f"gemini_model={self.gemini_model!r}, "
            f"log_level={self.log_level!r}, "
            f"timezone={self.timezone!r})"
        )


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the working
    directory is picked up automatically.

    Returns:
        A validated :class:`Settings` instance.

    Raises:
        ConfigError: If ``GEMINI_API_KEY`` is missing, empty, or
            whitespace-only.
    """
    load_dotenv()

    api_key = os.environ.get("GEMINI_API_KEY", "")
    if not api_key.strip():
        raise ConfigError("Missing required environment variables: GEMINI_API_KEY")

    values: dict[str, str] = {"gemini_api_key": api_key}

    optional = {
        "GEMINI_MODEL": "gemini_model",
        "LOG_LEVEL": "log_level",
        "TIMEZONE": "timezone",
    }
    for env_var, field_name in optional.items():
        raw = os.environ.get(env_var, "").strip()
        if raw:
            values[field_name] = raw

    return Settings(**values)
