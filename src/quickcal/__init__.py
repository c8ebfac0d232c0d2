"""quickcal: turn pasted text into a calendar invitation.

Extracts a single event from free-form text (an email, a flyer, a
message) with Google Gemini and serializes it as an importable
iCalendar (.ics) document.
"""

from __future__ import annotations

from quickcal.exceptions import (
    MalformedResponseError,
    QuickCalError,
    ServiceError,
    TransientServiceError,
)
from quickcal.extractor import Extractor, backoff_delay, decode_event
from quickcal.ics import IcsDocument, render, suggest_filename, write_ics
from quickcal.models import (
    CalendarEvent,
    EventPayload,
    ParseFailure,
    ParseOutcome,
    ParseSuccess,
)
from quickcal.prompts import build_prompt

__version__ = "0.1.0"

__all__ = [
    "CalendarEvent",
    "EventPayload",
    "Extractor",
    "IcsDocument",
    "MalformedResponseError",
    "ParseFailure",
    "ParseOutcome",
    "ParseSuccess",
    "QuickCalError",
    "ServiceError",
    "TransientServiceError",
    "backoff_delay",
    "build_prompt",
    "decode_event",
    "render",
    "suggest_filename",
    "write_ics",
]
