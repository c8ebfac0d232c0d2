"""Console rendering of an extracted event.

:func:`format_event` shows the event the way a user reads it: dates and
times converted to the viewer's timezone, followed by the optional
location, notes and guest list.  :func:`print_event` writes the result
to stdout.
"""

from __future__ import annotations

import sys
from datetime import datetime, tzinfo

from quickcal.models.event import CalendarEvent

_BANNER_WIDTH = 60
_SEPARATOR = "=" * _BANNER_WIDTH
_LABEL_WIDTH = 10


def format_event(event: CalendarEvent, tz: tzinfo) -> str:
    """Render *event* as a multi-line block in timezone *tz*.

    Args:
        event: The event to display.
        tz: Timezone the dates and times are shown in.

    Returns:
        A multi-line string ready for console display.
    """
    start = event.start_date.astimezone(tz)
    end = event.end_date.astimezone(tz)

    lines = [_SEPARATOR, f"  {event.summary}", _SEPARATOR]
    lines.append(_field("Date", _format_date(start)))

    if end.date() == start.date():
        time_range = f"{_format_time(start)} - {_format_time(end)}"
    else:
        time_range = f"{_format_time(start)} - {_format_date(end)} {_format_time(end)}"
    lines.append(_field("Time", f"{time_range} ({start.tzname()})"))

    if event.location:
        lines.append(_field("Location", event.location))
    if event.description:
        lines.append(_field("Notes", event.description))
    if event.attendees:
        lines.append(_field("Guests", ", ".join(event.attendees)))
    if event.has_inverted_range:
        lines.append("  [WARN] The event ends before it starts; check the times.")

    lines.append(_SEPARATOR)
    return "\n".join(lines)


def print_event(event: CalendarEvent, tz: tzinfo) -> None:
    """Format and print *event* to stdout."""
    sys.stdout.write(format_event(event, tz) + "\n")


def _field(label: str, value: str) -> str:
    return f"  {label + ':':<{_LABEL_WIDTH}} {value}"


def _format_date(value: datetime) -> str:
    # Friday, July 18, 2025
    return f"{value:%A, %B} {value.day}, {value.year}"


def _format_time(value: datetime) -> str:
    # 1:00 PM
    return f"{value.hour % 12 or 12}:{value:%M %p}"
