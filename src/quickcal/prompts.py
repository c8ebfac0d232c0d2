"""Prompt builder for the Gemini event-extraction call.

The prompt wraps the user's raw text with the timezone inference rules
the service must follow.  The response shape itself is enforced
separately through the response schema
(:class:`~quickcal.models.event.EventPayload`).
"""

from __future__ import annotations

from datetime import datetime


def build_prompt(
    text: str,
    reference_timezone: str,
    current_datetime: datetime,
) -> str:
    """Build the extraction prompt for a single event.

    Args:
        text: The raw user-supplied text (email, flyer, message).
        reference_timezone: IANA timezone of the caller, used only when
            the text gives no timezone or location cue.
        current_datetime: "Now" in the reference timezone, used by the
            model to resolve relative references such as "Friday".

    Returns:
        The complete prompt string.
    """
    return f"""\
Extract calendar event details from the following text: "{text}"

The current date and time is: {current_datetime.isoformat()}
Use this to resolve relative dates such as "tomorrow" or "next Friday".

Timezone Rules:
1. Analyze the text and location to determine the time zone (e.g. 'UMass \
Amherst', 'Boston', 'NYC', 'ET' = Eastern Time).
2. If the text or location suggests a specific time zone, apply the correct \
UTC offset to the ISO 8601 dates (e.g. -05:00 or -04:00 depending on \
daylight saving time).
3. If nothing in the text implies a time zone, assume the user's time zone: \
{reference_timezone}.
4. If the time zone is still completely ambiguous, use UTC.
5. Ensure startDate and endDate are full ISO 8601 strings including the offset.
6. If no end time or duration is given, assume the event lasts one hour.
"""
