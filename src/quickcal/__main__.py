"""Entry point for ``python -m quickcal`` and the ``quickcal`` script.

Reads event text from the command line, a file, or stdin, extracts the
event with Gemini, shows it, and writes the ``.ics`` file.  Uses stdlib
:mod:`argparse` for argument parsing.

Exit codes:
    0 -- Event extracted and written.
    1 -- An error occurred (empty input, unreadable file, config error,
         extraction failure, unwritable output directory).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from zoneinfo import ZoneInfoNotFoundError

from tzlocal import get_localzone_name

from quickcal.config import ConfigError, load_settings
from quickcal.display import print_event
from quickcal.extractor import Extractor, resolve_timezone
from quickcal.ics import render, write_ics
from quickcal.llm import GeminiService
from quickcal.log import setup_logging
from quickcal.models.outcome import ParseFailure

logger = logging.getLogger(__name__)

SAMPLE_TEXT = (
    "Join us for the Water Polo Enthusiast Meetup\n"
    "happening on Saturday, July 19, 2025,\n"
    " at 4:15 PM - 5:15 PM ET.\n"
    "We'll be gathering at the Bluefin Aquatic Center,\n"
    "located at 47 Seabreak Loop, Coralview Heights"
)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="quickcal",
        description=(
            "Turn an email, flyer or message into a calendar invitation "
            "(.ics) for Outlook, Google Calendar or Apple Calendar."
        ),
    )
    parser.add_argument(
        "text",
        nargs="?",
        default=None,
        help="Event text. Read from stdin when omitted and stdin is piped.",
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-f",
        "--file",
        type=str,
        default=None,
        help="Read the event text from a file.",
    )
    source.add_argument(
        "--example",
        action="store_true",
        default=False,
        help="Use a built-in sample flyer as input.",
    )

    parser.add_argument(
        "--timezone",
        type=str,
        default=None,
        help=(
            "Your IANA timezone, used when the text has no timezone cue "
            "(defaults to TIMEZONE from config, then the system timezone)."
        ),
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default=".",
        help="Directory the .ics file is written to (default: current directory).",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        default=False,
        help="Print the .ics document to stdout instead of writing a file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )
    return parser


def _read_text(args: argparse.Namespace) -> str:
    """Return the event text selected by *args*.

    Raises:
        OSError: If ``--file`` cannot be read.
    """
    if args.file is not None:
        return Path(args.file).read_text(encoding="utf-8")
    if args.example:
        return SAMPLE_TEXT
    if args.text is not None:
        return args.text
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return ""


def _local_timezone_name() -> str:
    """Return the system's IANA timezone name, or ``"UTC"`` if undetectable."""
    try:
        return get_localzone_name() or "UTC"
    except ZoneInfoNotFoundError as exc:
        logger.warning("Could not detect the system timezone (%s), using UTC", exc)
        return "UTC"


def main(argv: list[str] | None = None) -> int:
    """Run the quickcal CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.text is not None and (args.file is not None or args.example):
        parser.error("TEXT cannot be combined with --file or --example")

    # --- Read input ---------------------------------------------------
    try:
        text = _read_text(args)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if not text.strip():
        print("Error: No event text provided.", file=sys.stderr)
        return 1

    # --- Configuration and logging ------------------------------------
    try:
        settings = load_settings()
        setup_logging("DEBUG" if args.verbose else settings.log_level)
    except (ConfigError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    timezone_name, tz = resolve_timezone(
        args.timezone or settings.timezone or _local_timezone_name()
    )
    print(f"Your timezone: {timezone_name}", file=sys.stderr)

    # --- Extract ------------------------------------------------------
    extractor = Extractor(GeminiService(api_key=settings.gemini_api_key, model=settings.gemini_model))
    outcome = asyncio.run(extractor.parse(text, timezone_name))

    if isinstance(outcome, ParseFailure):
        print(f"Error: {outcome.message}", file=sys.stderr)
        return 1

    # --- Serialize ----------------------------------------------------
    document = render(outcome.event)

    if args.stdout:
        sys.stdout.write(document.content)
        return 0

    print_event(outcome.event, tz)

    try:
        path = write_ics(document, args.output_dir)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Saved {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
