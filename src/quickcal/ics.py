"""iCalendar (.ics) serialization for a single event.

Renders a :class:`~quickcal.models.event.CalendarEvent` into an RFC 5545
calendar document that Outlook, Google Calendar and Apple Calendar can
import.  Rendering is pure: the only inputs besides the event are the
generation instant and the random UID token, both of which can be
supplied by the caller.

Document layout (CRLF line endings)::

    BEGIN:VCALENDAR
    VERSION:2.0
    PRODID:-//QuickCal//AI Event Generator//EN
    CALSCALE:GREGORIAN
    METHOD:REQUEST
    BEGIN:VEVENT
    UID / DTSTAMP / DTSTART / DTEND / SUMMARY / DESCRIPTION / LOCATION
    STATUS:CONFIRMED
    ATTENDEE... (one per attendee)
    END:VEVENT
    END:VCALENDAR
"""

from __future__ import annotations

import logging
import re
import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from quickcal.models.event import CalendarEvent

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ICS_MIME_TYPE = "text/calendar;charset=utf-8"
ICS_EXTENSION = ".ics"
PRODUCT_ID = "-//QuickCal//AI Event Generator//EN"
UID_DOMAIN = "quickcal.ai"
CRLF = "\r\n"

_UID_TOKEN_LENGTH = 9
_UID_ALPHABET = string.digits + string.ascii_lowercase
_LINE_BREAK = re.compile(r"\r\n|[\r\n\u0085\u2028\u2029]")
_FILENAME_UNSAFE = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class IcsDocument:
    """A rendered calendar document and the file name to offer it under.

    Attributes:
        content: The full document text with CRLF line endings.
        filename: Suggested download file name (``<slug>.ics``).
    """

    content: str
    filename: str

    @property
    def mime_type(self) -> str:
        return ICS_MIME_TYPE


# ---------------------------------------------------------------------------
# Field encoders
# ---------------------------------------------------------------------------


def format_ics_timestamp(value: datetime) -> str:
    """Encode an aware ``datetime`` as a UTC basic-format timestamp.

    Fractional seconds are dropped: ``2025-07-19T12:15:00.5-04:00``
    becomes ``20250719T161500Z``.  The year is always four digits.
    """
    u = value.astimezone(timezone.utc)
    return f"{u.year:04d}{u.month:02d}{u.day:02d}T{u.hour:02d}{u.minute:02d}{u.second:02d}Z"


def escape_text(value: str) -> str:
    """Replace line breaks with the literal ``\\n`` escape sequence."""
    return _LINE_BREAK.sub(lambda _match: "\\n", value)


def suggest_filename(summary: str) -> str:
    """Derive a download file name from the event summary.

    Lower-cases *summary* and replaces every character outside
    ``[a-z0-9]`` with ``_``; ``"Team Lunch!"`` becomes ``team_lunch_.ics``.
    """
    return _FILENAME_UNSAFE.sub("_", summary.lower()) + ICS_EXTENSION


def generate_uid(stamp: str, token: str | None = None) -> str:
    """Build a globally unique event UID from the generation timestamp."""
    if token is None:
        token = "".join(secrets.choice(_UID_ALPHABET) for _ in range(_UID_TOKEN_LENGTH))
    return f"{stamp}-{token}@{UID_DOMAIN}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render(
    event: CalendarEvent,
    *,
    now: datetime | None = None,
    uid_token: str | None = None,
) -> IcsDocument:
    """Render *event* as an iCalendar document.

    Args:
        event: The event to serialize.  It is never modified.
        now: Generation instant used for ``DTSTAMP`` and the UID.
            Defaults to the current UTC time.
        uid_token: Suffix for the UID.  Defaults to nine random base-36
            characters.

    Returns:
        An :class:`IcsDocument` holding the content and file name.
    """
    stamp = format_ics_timestamp(now or datetime.now(timezone.utc))

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODUCT_ID}",
        "CALSCALE:GREGORIAN",
        # REQUEST so clients treat attendees as invitations.
        "METHOD:REQUEST",
        "BEGIN:VEVENT",
        f"UID:{generate_uid(stamp, uid_token)}",
        f"DTSTAMP:{stamp}",
        f"DTSTART:{format_ics_timestamp(event.start_date)}",
        f"DTEND:{format_ics_timestamp(event.end_date)}",
        f"SUMMARY:{escape_text(event.summary)}",
        f"DESCRIPTION:{escape_text(event.description)}",
        f"LOCATION:{escape_text(event.location)}",
        "STATUS:CONFIRMED",
    ]
    lines.extend(
        f"ATTENDEE;RSVP=TRUE;ROLE=REQ-PARTICIPANT:mailto:{email}"
        for email in event.attendees
    )
    lines.append("END:VEVENT")
    lines.append("END:VCALENDAR")

    return IcsDocument(content=CRLF.join(lines), filename=suggest_filename(event.summary))


def write_ics(document: IcsDocument, directory: Path | str = ".") -> Path:
    """Write *document* into *directory* under its suggested file name.

    The content is written as UTF-8 bytes so CRLF line endings survive
    on every platform.

    Returns:
        The path of the written file.
    """
    path = Path(directory) / document.filename
    path.write_bytes(document.content.encode("utf-8"))
    logger.info("Wrote calendar file %s", path)
    return path
