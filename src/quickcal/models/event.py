"""Pydantic models for the extracted calendar event.

- :class:`EventPayload` -- the response-shape contract sent to the
  text-understanding service and used to decode its JSON reply (dates
  are still ISO 8601 strings at this stage).
- :class:`CalendarEvent` -- the immutable domain event with parsed,
  timezone-aware ``datetime`` values.  This is what the serializer and
  the display layer consume.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# EventPayload -- wire contract
# ---------------------------------------------------------------------------


class EventPayload(BaseModel):
    """Structured event as returned by the service.

    JSON keys are camelCase (``startDate``); attributes are snake_case.
    Field descriptions are forwarded to the service as part of the
    response schema.

    Attributes:
        summary: Event title.
        description: Additional notes, or ``None``.
        location: Venue, or ``None``.
        start_date: ISO 8601 start, including a UTC offset.
        end_date: ISO 8601 end, including a UTC offset.
        attendees: Email addresses to invite, or ``None``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    summary: str = Field(description="The title or name of the event.")
    location: str | None = Field(
        default=None,
        description="The physical location or address of the event.",
    )
    description: str | None = Field(
        default=None,
        description="Any additional notes, context, or details extracted from the text.",
    )
    start_date: str = Field(
        description=(
            "The start date and time in ISO 8601 format including the UTC "
            "offset (e.g. 2025-12-15T17:00:00-05:00)."
        ),
    )
    end_date: str = Field(
        description=(
            "The end date and time in ISO 8601 format including the UTC "
            "offset. Calculate this from the duration or explicit end time."
        ),
    )
    attendees: list[str] | None = Field(
        default=None,
        description="A list of email addresses found in the text to be invited.",
    )


# ---------------------------------------------------------------------------
# CalendarEvent -- domain event
# ---------------------------------------------------------------------------


def parse_instant(value: str, default_tz: tzinfo = timezone.utc) -> datetime:
    """Parse an ISO 8601 string into a timezone-aware ``datetime``.

    A value without a UTC offset is interpreted in *default_tz*.

    Raises:
        ValueError: If *value* is not a valid ISO 8601 date/time.
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=default_tz)
    return parsed


class CalendarEvent(BaseModel):
    """A single calendar event, immutable once constructed.

    Attributes:
        summary: Event title, stripped and non-empty.
        description: Free-text notes (may be empty).
        location: Venue (may be empty).
        start_date: Timezone-aware start instant.
        end_date: Timezone-aware end instant.
        attendees: Attendee email addresses in input order.
    """

    model_config = ConfigDict(frozen=True)

    summary: str
    description: str = ""
    location: str = ""
    start_date: AwareDatetime
    end_date: AwareDatetime
    attendees: tuple[str, ...] = ()

    @field_validator("summary")
    @classmethod
    def _summary_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("summary must not be empty")
        return value

    @field_validator("start_date", "end_date")
    @classmethod
    def _representable_in_utc(cls, value: datetime) -> datetime:
        try:
            value.astimezone(timezone.utc)
        except OverflowError:
            raise ValueError(f"date {value.isoformat()} is out of range") from None
        return value

    @property
    def has_inverted_range(self) -> bool:
        """Whether the event ends before it starts."""
        return self.end_date < self.start_date

    @classmethod
    def from_payload(
        cls,
        payload: EventPayload,
        default_tz: tzinfo = timezone.utc,
    ) -> CalendarEvent:
        """Create a :class:`CalendarEvent` from a decoded :class:`EventPayload`.

        Args:
            payload: The decoded service response.
            default_tz: Timezone applied to dates that carry no offset.

        Raises:
            ValueError: If a date cannot be parsed or the summary is
                blank (pydantic's ``ValidationError`` is a ``ValueError``).
        """
        return cls(
            summary=payload.summary,
            description=payload.description or "",
            location=payload.location or "",
            start_date=parse_instant(payload.start_date, default_tz),
            end_date=parse_instant(payload.end_date, default_tz),
            attendees=tuple(payload.attendees or ()),
        )
