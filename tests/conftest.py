"""Shared fixtures for quickcal tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from typing import Any

import pytest
from pydantic import BaseModel


class StubService:
    """Deterministic stand-in for the text-understanding service.

    Each call to :meth:`generate` consumes the next scripted item: a string
    is returned as the response body, an exception instance is raised.
    """

    def __init__(self, *responses: str | BaseException) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        *,
        response_schema: type[BaseModel],
        temperature: float,
    ) -> str:
        self.calls.append(
            {
                "prompt": prompt,
                "response_schema": response_schema,
                "temperature": temperature,
            }
        )
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class RecordingSleep:
    """Async sleep replacement that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)

    @property
    def total(self) -> float:
        return sum(self.delays)


def event_json(**overrides: Any) -> str:
    """Return a valid service response body, with optional field overrides.

    Passing ``None`` for a key removes it from the payload.
    """
    payload: dict[str, Any] = {
        "summary": "Team lunch",
        "location": "Joe's Pizza",
        "startDate": "2025-07-18T13:00:00-04:00",
        "endDate": "2025-07-18T14:00:00-04:00",
    }
    for key, value in overrides.items():
        if value is None:
            payload.pop(key, None)
        else:
            payload[key] = value
    return json.dumps(payload)


@pytest.fixture()
def make_service() -> Callable[..., StubService]:
    """Factory for :class:`StubService` instances."""
    return StubService


@pytest.fixture()
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def valid_event_json() -> Callable[..., str]:
    """Factory for valid service response bodies (see :func:`event_json`)."""
    return event_json


@pytest.fixture()
def monkeypatch_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set all required environment variables to valid defaults.

    Also patches ``load_dotenv`` so that a real ``.env`` file on disk does not
    override the test values.

    Returns the dict of variables so tests can inspect or override values.
    """
    monkeypatch.setattr("quickcal.config.load_dotenv", lambda *_a, **_kw: None)
    env_vars = {"GEMINI_API_KEY": "test-gemini-key-12345"}
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    for key in ("GEMINI_MODEL", "LOG_LEVEL", "TIMEZONE"):
        monkeypatch.delenv(key, raising=False)
    return env_vars


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all quickcal-related environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("quickcal.config.load_dotenv", lambda *_a, **_kw: None)
    for key in ("GEMINI_API_KEY", "GEMINI_MODEL", "LOG_LEVEL", "TIMEZONE"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Reset the root logger after each test to prevent handler leaks."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
