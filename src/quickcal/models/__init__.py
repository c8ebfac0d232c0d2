"""Data models for quickcal."""

from __future__ import annotations

from quickcal.models.event import CalendarEvent, EventPayload, parse_instant
from quickcal.models.outcome import ParseFailure, ParseOutcome, ParseSuccess

__all__ = [
    "CalendarEvent",
    "EventPayload",
    "ParseFailure",
    "ParseOutcome",
    "ParseSuccess",
    "parse_instant",
]
