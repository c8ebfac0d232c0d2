"""Natural-language to calendar-event extraction.

:class:`Extractor` sends the user's text to a
:class:`~quickcal.llm.TextService`, decodes the JSON reply into a
:class:`~quickcal.models.event.CalendarEvent`, and retries with
exponential backoff while the service reports overload.  Every failure
is returned as a :class:`~quickcal.models.outcome.ParseFailure`;
:meth:`Extractor.parse` never raises.

Retry policy:

- Up to ``max_attempts`` (default 3) sequential attempts.
- Only :class:`~quickcal.exceptions.TransientServiceError` is retried,
  after sleeping :func:`backoff_delay` seconds (1s, 2s, 4s, ...).
- Terminal service errors and undecodable responses fail immediately.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError

from quickcal.exceptions import MalformedResponseError, ServiceError, TransientServiceError
from quickcal.llm import TextService
from quickcal.models.event import CalendarEvent, EventPayload
from quickcal.models.outcome import ParseFailure, ParseOutcome, ParseSuccess
from quickcal.prompts import build_prompt

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
# Low temperature keeps repeated extractions of the same text consistent.
DEFAULT_TEMPERATURE = 0.1

RATE_LIMIT_MESSAGE = (
    "We're receiving too many requests right now (Quota Limit). "
    "Please wait a moment and try again."
)
EMPTY_INPUT_MESSAGE = "Please paste some text describing the event."
FALLBACK_MESSAGE = "Failed to parse event details."


def backoff_delay(attempt: int) -> float:
    """Seconds to wait after the failed 0-indexed *attempt*."""
    return float(2**attempt)


def resolve_timezone(name: str) -> tuple[str, tzinfo]:
    """Resolve an IANA timezone name, falling back to UTC.

    Returns:
        A ``(name, tzinfo)`` pair; the name is ``"UTC"`` on fallback.
    """
    if name and name.strip():
        try:
            return name.strip(), ZoneInfo(name.strip())
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r, falling back to UTC", name)
    return "UTC", timezone.utc


def decode_event(raw_text: str, default_tz: tzinfo = timezone.utc) -> CalendarEvent:
    """Decode a raw service response into a :class:`CalendarEvent`.

    Args:
        raw_text: JSON body returned by the service.
        default_tz: Timezone applied to dates without a UTC offset.

    Raises:
        MalformedResponseError: If the body is not JSON, misses a
            required field, or carries an invalid date or blank title.
    """
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Invalid JSON: {exc}", raw_response=raw_text) from exc

    try:
        payload = EventPayload.model_validate(data)
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) or "<root>"
            for error in exc.errors()
        )
        raise MalformedResponseError(
            f"Response is missing or has invalid fields: {fields}",
            raw_response=raw_text,
        ) from exc

    try:
        return CalendarEvent.from_payload(payload, default_tz)
    except ValueError as exc:
        raise MalformedResponseError(
            f"Invalid event data parsed: {exc}", raw_response=raw_text
        ) from exc


class Extractor:
    """Turns free-form text into a single :class:`CalendarEvent`.

    Args:
        service: The text-understanding service to query.
        max_attempts: Total attempt budget for transient failures.
        temperature: Sampling temperature passed to the service.
        sleep: Awaitable sleep used for backoff; tests inject a recorder.
        clock: Returns the current aware ``datetime``; defaults to UTC now.
    """

    def __init__(
        self,
        service: TextService,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        temperature: float = DEFAULT_TEMPERATURE,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._service = service
        self._max_attempts = max_attempts
        self._temperature = temperature
        self._sleep = sleep
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def parse(self, text: str, reference_timezone: str = "UTC") -> ParseOutcome:
        """Extract one event from *text*.

        Args:
            text: Raw, untrusted user text.
            reference_timezone: Caller's IANA timezone, used only when the
                text carries no timezone cue.

        Returns:
            :class:`ParseSuccess` on the first attempt that decodes, or
            :class:`ParseFailure` with a user-facing message.
        """
        if not text or not text.strip():
            return ParseFailure(EMPTY_INPUT_MESSAGE)

        tz_name, tz = resolve_timezone(reference_timezone)
        prompt = build_prompt(text, tz_name, self._clock().astimezone(tz))

        for attempt in range(self._max_attempts):
            try:
                event = await self._attempt(prompt, tz, attempt)
            except TransientServiceError as exc:
                logger.error("Attempt %d/%d failed: %s", attempt + 1, self._max_attempts, exc)
                if attempt + 1 < self._max_attempts:
                    delay = backoff_delay(attempt)
                    logger.warning("Quota hit. Retrying in %.0fs...", delay)
                    await self._sleep(delay)
            except (ServiceError, MalformedResponseError) as exc:
                logger.error("Attempt %d/%d failed: %s", attempt + 1, self._max_attempts, exc)
                return ParseFailure(str(exc) or FALLBACK_MESSAGE)
            except Exception as exc:
                logger.exception("Unexpected error during extraction")
                return ParseFailure(str(exc) or FALLBACK_MESSAGE)
            else:
                return ParseSuccess(event)

        logger.error("Service still overloaded after %d attempts", self._max_attempts)
        return ParseFailure(RATE_LIMIT_MESSAGE)

    async def _attempt(self, prompt: str, tz: tzinfo, attempt: int) -> CalendarEvent:
        raw_text = await self._service.generate(
            prompt,
            response_schema=EventPayload,
            temperature=self._temperature,
        )
        logger.debug("Raw response (attempt %d):\n%s", attempt + 1, raw_text)

        event = decode_event(raw_text, tz)
        logger.info(
            "Extracted event: '%s' | %s -> %s",
            event.summary,
            event.start_date.isoformat(),
            event.end_date.isoformat(),
        )
        if event.has_inverted_range:
            logger.warning("Event '%s' ends before it starts", event.summary)
        return event
