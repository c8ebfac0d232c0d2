"""Custom exceptions for the quickcal extraction pipeline.

These exceptions carry failures from the text-understanding service and
from response decoding up to the :class:`~quickcal.extractor.Extractor`,
which converts every one of them into a
:class:`~quickcal.models.outcome.ParseFailure`.  None of them escape
:meth:`~quickcal.extractor.Extractor.parse`.

Exception hierarchy::

    QuickCalError                 (base)
    +-- ServiceError              (terminal service / transport failure)
    |   +-- TransientServiceError (overload, rate limit, unavailable)
    +-- MalformedResponseError    (response body cannot be decoded)
"""

from __future__ import annotations


class QuickCalError(Exception):
    """Base exception for quickcal."""


class ServiceError(QuickCalError):
    """Raised when the text-understanding service call fails.

    Covers authentication failures, unexpected HTTP errors and network
    problems.  Retrying the same request is not expected to help.

    Attributes:
        status_code: HTTP status code reported by the service, or ``None``
            if the failure did not originate from an HTTP response.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransientServiceError(ServiceError):
    """Raised when the service is overloaded, rate limited or unavailable.

    The extractor backs off and retries on this error.
    """


class MalformedResponseError(QuickCalError):
    """Raised when the service response cannot be decoded into an event.

    Attributes:
        raw_response: The raw service output that failed to decode.
    """

    def __init__(self, message: str, raw_response: str = "") -> None:
        super().__init__(message)
        self.raw_response = raw_response
