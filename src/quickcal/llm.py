"""Gemini adapter for the text-understanding service.

The extractor only depends on the narrow :class:`TextService` protocol:
a prompt goes in, a JSON string comes out, and failures are reported as
:class:`~quickcal.exceptions.TransientServiceError` (worth retrying) or
:class:`~quickcal.exceptions.ServiceError` (not worth retrying).
:class:`GeminiService` implements it on top of the ``google-genai`` SDK;
tests substitute a deterministic stub.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types
from pydantic import BaseModel

from quickcal.config import DEFAULT_MODEL
from quickcal.exceptions import MalformedResponseError, ServiceError, TransientServiceError

logger = logging.getLogger(__name__)

_TRANSIENT_CODES = frozenset({429, 503})
_TRANSIENT_STATUSES = frozenset({"RESOURCE_EXHAUSTED", "UNAVAILABLE"})


class TextService(Protocol):
    """Request/response contract of the text-understanding service."""

    async def generate(
        self,
        prompt: str,
        *,
        response_schema: type[BaseModel],
        temperature: float,
    ) -> str:
        """Return the raw JSON body produced for *prompt*.

        Raises:
            TransientServiceError: The service is overloaded or unavailable.
            ServiceError: Any other service or transport failure.
            MalformedResponseError: The service returned an empty body.
        """
        ...


def is_transient(error: genai_errors.APIError) -> bool:
    """Whether a Gemini API error signals overload or rate limiting.

    Matches HTTP 429/503, the ``RESOURCE_EXHAUSTED``/``UNAVAILABLE``
    statuses, and error text mentioning "resource exhausted" since the
    exact shape varies between SDK versions.
    """
    if error.code in _TRANSIENT_CODES:
        return True
    if (error.status or "").upper() in _TRANSIENT_STATUSES:
        return True
    return "resource exhausted" in str(error).lower()


class GeminiService:
    """:class:`TextService` backed by Google Gemini structured output.

    Args:
        api_key: Google Gemini API key.
        model: Model identifier to use for generation.
    """

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL) -> None:
        self._client = genai.Client(api_key=api_key)
        self._model = model

    async def generate(
        self,
        prompt: str,
        *,
        response_schema: type[BaseModel],
        temperature: float,
    ) -> str:
        config = genai_types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=response_schema,
            temperature=temperature,
        )
        logger.debug("Prompt sent to Gemini (%s):\n%s", self._model, prompt)

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as exc:
            if is_transient(exc):
                logger.warning("Gemini overloaded (HTTP %s): %s", exc.code, exc)
                raise TransientServiceError(str(exc), status_code=exc.code) from exc
            logger.error("Gemini API error (HTTP %s): %s", exc.code, exc)
            raise ServiceError(f"Gemini API call failed: {exc}", status_code=exc.code) from exc
        except httpx.HTTPError as exc:
            logger.error("Gemini request failed: %s", exc)
            raise ServiceError(f"Gemini request failed: {exc}") from exc

        text = response.text or ""
        if not text.strip():
            raise MalformedResponseError("No response from the model", raw_response=text)
        return text
