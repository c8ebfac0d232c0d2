"""Unit tests for the console event formatter."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from quickcal.display import format_event, print_event
from quickcal.models.event import CalendarEvent

_EDT = timezone(timedelta(hours=-4))
_NEW_YORK = ZoneInfo("America/New_York")


def _event(**overrides: object) -> CalendarEvent:
    values: dict[str, object] = {
        "summary": "Team lunch",
        "start_date": datetime(2025, 7, 18, 13, 0, tzinfo=_EDT),
        "end_date": datetime(2025, 7, 18, 14, 0, tzinfo=_EDT),
    }
    values.update(overrides)
    return CalendarEvent(**values)


def test_title_date_and_time_range() -> None:
    output = format_event(_event(), _NEW_YORK)

    assert "Team lunch" in output
    assert "Friday, July 18, 2025" in output
    assert "1:00 PM - 2:00 PM (EDT)" in output


def test_times_shown_in_viewer_timezone() -> None:
    output = format_event(_event(), ZoneInfo("Europe/Berlin"))

    assert "7:00 PM - 8:00 PM (CEST)" in output


def test_multi_day_event_shows_end_date() -> None:
    event = _event(end_date=datetime(2025, 7, 19, 10, 0, tzinfo=_EDT))

    output = format_event(event, _NEW_YORK)

    assert "1:00 PM - Saturday, July 19, 2025 10:00 AM" in output


def test_optional_fields_shown_when_present() -> None:
    event = _event(
        location="Joe's Pizza",
        description="Celebrating the launch",
        attendees=("ann@example.com", "bo@example.com"),
    )

    output = format_event(event, _NEW_YORK)

    assert "Joe's Pizza" in output
    assert "Celebrating the launch" in output
    assert "ann@example.com, bo@example.com" in output


def test_optional_fields_omitted_when_empty() -> None:
    output = format_event(_event(), _NEW_YORK)

    assert "Location:" not in output
    assert "Notes:" not in output
    assert "Guests:" not in output


def test_inverted_range_warning() -> None:
    event = _event(end_date=datetime(2025, 7, 18, 12, 0, tzinfo=_EDT))

    assert "[WARN]" in format_event(event, _NEW_YORK)
    assert "[WARN]" not in format_event(_event(), _NEW_YORK)


def test_print_event_writes_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    print_event(_event(), _NEW_YORK)

    assert "Team lunch" in capsys.readouterr().out
