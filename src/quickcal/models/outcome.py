"""Result types returned by :meth:`quickcal.extractor.Extractor.parse`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from quickcal.models.event import CalendarEvent


@dataclass(frozen=True)
class ParseSuccess:
    """Extraction produced a valid event."""

    event: CalendarEvent

    @property
    def ok(self) -> Literal[True]:
        """Always ``True``; an event was extracted."""
        return True


@dataclass(frozen=True)
class ParseFailure:
    """Extraction failed.

    Attributes:
        message: Human-readable explanation, shown to the user verbatim.
    """

    message: str

    @property
    def ok(self) -> Literal[False]:
        """Always ``False``; see :attr:`message` for the reason."""
        return False


ParseOutcome = ParseSuccess | ParseFailure
