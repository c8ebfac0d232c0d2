"""Logging setup for quickcal.

One stderr handler with ISO 8601 timestamps and pipe-separated fields.
stdout is left alone so ``quickcal --stdout`` can emit a clean calendar
document.  The HTTP stack used by ``google-genai`` logs every request at
INFO; those loggers are held at WARNING unless debugging.
"""

from __future__ import annotations

import logging
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_HANDLER_ATTR = "_quickcal_log_handler"
_NOISY_LOGGERS = ("httpx", "httpcore", "google_genai")


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger for the CLI.

    Safe to call repeatedly: the quickcal handler is attached once and
    later calls only adjust levels.

    Args:
        level: A standard logging level name, case-insensitive.

    Raises:
        ValueError: If *level* is not a recognised logging level string.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")

    root = logging.getLogger()
    root.setLevel(numeric_level)

    handler = next((h for h in root.handlers if getattr(h, _HANDLER_ATTR, False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        setattr(handler, _HANDLER_ATTR, True)
        root.addHandler(handler)
    handler.setLevel(numeric_level)

    third_party_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)


def get_logger(name: str) -> logging.Logger:
    """Return a named logger (typically ``get_logger(__name__)``)."""
    return logging.getLogger(name)
