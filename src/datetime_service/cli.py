"""
Command-line front-end: parse dates and show them in UTC and in a user's calendar.

Example::

    datetime-service "۱۴۰۲/۰۵/۰۱ ۱۲:۰۵" --tz Asia/Tehran --calendar persian

With no values an interactive prompt is started.
"""
from __future__ import annotations

import argparse
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from datetime_service.config import Settings, load_settings
from datetime_service.errors import DateTimeServiceError
from datetime_service.logging_setup import setup_logging
from datetime_service.service import DateTimeService
from datetime_service.types.datetime_types import CalendarKind

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="datetime-service",
        description="Parse Persian/Hijri/Gregorian dates and render them for a user",
    )
    parser.add_argument("values", nargs="*", help="Date strings to parse (prompt when omitted)")
    parser.add_argument("--tz", default=None, help="Timezone of the input and output (default from settings)")
    parser.add_argument("--calendar", default=None, help="Output calendar: persian, hijri or gregorian")
    parser.add_argument("--locale", default=None, help="Locale hint for digits, e.g. fa-IR")
    parser.add_argument("--env-file", type=Path, default=None, help="Path of the .env file")
    parser.add_argument("--log-level", default=None, help="Log level (default from settings)")
    return parser


def describe(
    service: DateTimeService,
    value: str,
    timezone_id: str,
    calendar: CalendarKind,
    locale_hint: Optional[str] = None,
    now: Optional[datetime] = None,
) -> List[str]:
    """Lines shown for one parsed value; raises DateTimeServiceError on bad input."""
    utc = service.parse_any(value, timezone_id)
    return [
        f"Input : {value}",
        f"UTC   : {utc.strftime('%Y-%m-%dT%H:%M:%SZ')}",
        f"Local : {service.format_for_user(utc, timezone_id, calendar, locale_hint)}"
        f"  ({calendar.value}, {timezone_id})",
        f"When  : {service.humanize_relative(utc, now or datetime.now(timezone.utc))}",
    ]


def _print_value(service, value, timezone_id, calendar, locale_hint) -> bool:
    try:
        lines = describe(service, value, timezone_id, calendar, locale_hint)
    except DateTimeServiceError as exc:
        print(f"💥 {exc}")
        return False
    print("\n".join(lines))
    return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings: Settings = load_settings(args.env_file)

    setup_logging(level=args.log_level or settings.log_level, log_file=settings.log_file)

    calendar = CalendarKind.from_name(args.calendar) if args.calendar else settings.default_calendar
    if calendar is CalendarKind.OTHER:
        print(f"💥 Unsupported calendar: {args.calendar!r}")
        return 2

    timezone_id = args.tz or settings.default_timezone
    service = DateTimeService.from_settings(settings)
    logger.debug("⚙️  CLI ready: tz=%s calendar=%s", timezone_id, calendar.value)

    if args.values:
        results = [_print_value(service, v, timezone_id, calendar, args.locale) for v in args.values]
        return 0 if all(results) else 1

    while True:
        try:
            value = input("\nDate> ")
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return 0
        if value.strip().lower() in {"exit", "quit"}:
            return 0
        if value.strip():
            _print_value(service, value, timezone_id, calendar, args.locale)


if __name__ == "__main__":
    raise SystemExit(main())
