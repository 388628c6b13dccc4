import logging
import re
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

from dateutil import parser as du_parser

from datetime_service.errors import InvalidCalendarDate, NoPatternMatch, UnknownZone
from datetime_service.types.datetime_types import (
    CalendarKind,
    CivilInstant,
    ParsedDateTimeFields,
    TimeZoneHandle,
)
from datetime_service.utils import calendars, digits, patterns
from datetime_service.utils.humanize import humanize_relative as _humanize
from datetime_service.utils.timezones import TimezoneResolver

logger = logging.getLogger(__name__)

LocalValue = Union[CivilInstant, datetime]

# calendar, week or ordinal date at the start of an ISO-8601 literal
_ISO_FULL_DATE_RE = re.compile(r"^[0-9]{4}(?:-[0-9]{2}-[0-9]{2}|[0-9]{4}|-?W[0-9]{2}-?[0-9]|-?[0-9]{3})(?![0-9])")

# two unrelated defaults: a date field the text omits shows up as a mismatch
_SENTINEL_A = datetime(2000, 1, 1)
_SENTINEL_B = datetime(2001, 2, 2)


def _utc(dt: datetime) -> datetime:
    return dt.astimezone(timezone.utc).replace(microsecond=0)


class DateTimeService:
    """
    Parse, convert and format dates across Persian, Hijri and Gregorian calendars.

    Thread-safe; the only state is the TimezoneResolver's append-only cache.
    Every `timezone_id=None` argument means `default_timezone`.
    """

    def __init__(
        self,
        resolver: Optional[TimezoneResolver] = None,
        default_timezone: str = "UTC",
    ):
        self.resolver = resolver or TimezoneResolver()
        self.default_timezone = default_timezone

    @classmethod
    def from_settings(cls, settings, resolver: Optional[TimezoneResolver] = None) -> "DateTimeService":
        return cls(resolver=resolver, default_timezone=settings.default_timezone)

    def _zone(self, timezone_id: Optional[str]) -> TimeZoneHandle:
        return self.resolver.resolve(self.default_timezone if timezone_id is None else timezone_id)

    # ───────────────────  Normalization ─────────────────── #

    @staticmethod
    def normalize(text: Optional[str]) -> str:
        return digits.normalize(text)

    @staticmethod
    def normalize_for_date(text: Optional[str]) -> str:
        return digits.normalize_for_date(text)

    # ───────────────────  Conversion ─────────────────── #

    def to_utc(self, local: LocalValue, timezone_id: Optional[str] = None) -> datetime:
        """
        UTC instant for a local wall-clock value in `timezone_id`.

        Aware datetimes already name an instant and are converted as-is.
        Unknown zones behave like UTC. An impossible CivilInstant, or a shift
        past the `datetime` range, raises InvalidCalendarDate.
        """
        try:
            if isinstance(local, datetime) and local.tzinfo is not None:
                return _utc(local)
            naive = local.to_datetime() if isinstance(local, CivilInstant) else local.replace(tzinfo=None)
            zone = self._zone(timezone_id)
            offset = zone.utcoffset(naive)
            return (naive - offset).replace(tzinfo=timezone.utc, microsecond=0)
        except (ValueError, OverflowError) as exc:
            civil = local if isinstance(local, CivilInstant) else CivilInstant.from_datetime(local)
            raise InvalidCalendarDate(CalendarKind.GREGORIAN.value, civil.as_tuple(), str(exc)) from exc

    def _fields_to_utc(
        self,
        fields: ParsedDateTimeFields,
        converter: calendars.CalendarConverter,
        timezone_id: Optional[str],
    ) -> datetime:
        civil = converter.to_civil_instant(*fields.as_tuple())
        try:
            return self.to_utc(civil, timezone_id)
        except InvalidCalendarDate as exc:
            # report the fields as the caller wrote them
            raise InvalidCalendarDate(converter.kind.value, fields.as_tuple(), exc.reason) from exc

    # ───────────────────  Parsing ─────────────────── #

    def parse_persian(self, text: Optional[str], timezone_id: Optional[str] = None) -> datetime:
        """
        Parse a Persian (Jalali) date with optional time, e.g. "۱۴۰۲/۰۵/۱۱ ۱۲:۳۰",
        and return the UTC instant it names in `timezone_id`.

        Raises NoPatternMatch or InvalidCalendarDate.
        """
        fields = patterns.match(digits.normalize_for_date(text))
        if fields is None:
            raise NoPatternMatch(text)
        result = self._fields_to_utc(fields, calendars.PERSIAN, timezone_id)
        logger.debug("📅 parse_persian: %r → %s", text, result.isoformat())
        return result

    def try_parse_persian(self, text: Optional[str], timezone_id: Optional[str] = None) -> Optional[datetime]:
        try:
            return self.parse_persian(text, timezone_id)
        except (NoPatternMatch, InvalidCalendarDate):
            return None

    def _from_instant_literal(self, text: str, timezone_id: Optional[str]) -> Optional[datetime]:
        # ISO-8601 instant; no offset means UTC, the zone is not consulted
        normalized = digits.normalize(text)
        if not _ISO_FULL_DATE_RE.match(normalized):
            return None
        try:
            dt = du_parser.isoparse(normalized)
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return _utc(dt)
        except (ValueError, OverflowError):
            return None

    def _from_local_literal(self, text: str, timezone_id: Optional[str]) -> Optional[datetime]:
        # free-form Gregorian literal ("1 March 2025 12:30"); year, month and day must all be written
        normalized = digits.normalize(text)
        try:
            first = du_parser.parse(normalized, default=_SENTINEL_A)
            second = du_parser.parse(normalized, default=_SENTINEL_B)
            if first.date() != second.date():
                logger.debug("📛 free-form literal %r leaves date fields to the default", text)
                return None
            return self.to_utc(first, timezone_id)
        except (ValueError, OverflowError):
            return None

    def _from_gregorian_fields(self, text: str, timezone_id: Optional[str]) -> Optional[datetime]:
        fields = patterns.match(digits.normalize_for_date(text))
        if fields is None:
            return None
        try:
            return self._fields_to_utc(fields, calendars.GREGORIAN, timezone_id)
        except InvalidCalendarDate:
            return None

    def _strategies(self) -> List[Callable[[str, Optional[str]], Optional[datetime]]]:
        # order matters: Persian wins on ambiguous numeric input
        return [
            self.try_parse_persian,
            self._from_instant_literal,
            self._from_local_literal,
            self._from_gregorian_fields,
        ]

    def parse_any(self, text: Optional[str], timezone_id: Optional[str] = None) -> datetime:
        """
        Best-effort parse of Persian, ISO-8601, free-form Gregorian or numeric
        Gregorian input, tried in that order. Raises NoPatternMatch when none fits.
        """
        if not text or not text.strip():
            raise NoPatternMatch(text)
        for strategy in self._strategies():
            result = strategy(text, timezone_id)
            if result is not None:
                logger.debug("📅 parse_any: %r → %s (via %s)",
                             text, result.isoformat(), strategy.__name__)
                return result
        logger.debug("📛 parse_any: no strategy matched %r", text)
        raise NoPatternMatch(text)

    def try_parse_any(self, text: Optional[str], timezone_id: Optional[str] = None) -> Optional[datetime]:
        try:
            return self.parse_any(text, timezone_id)
        except NoPatternMatch:
            return None

    # ───────────────────  Formatting ─────────────────── #

    def to_local(self, utc_value: datetime, timezone_id: Optional[str] = None) -> CivilInstant:
        """Wall-clock reading of a UTC instant in `timezone_id` (naive input = UTC)."""
        if utc_value.tzinfo is None:
            utc_value = utc_value.replace(tzinfo=timezone.utc)
        zone = self._zone(timezone_id)
        try:
            return CivilInstant.from_datetime(utc_value.astimezone(zone.tzinfo))
        except OverflowError as exc:
            raise InvalidCalendarDate(
                CalendarKind.GREGORIAN.value, CivilInstant.from_datetime(utc_value).as_tuple(), str(exc)
            ) from exc

    def format_for_user(
        self,
        utc_value: datetime,
        timezone_id: Optional[str],
        calendar,
        locale_hint: Optional[str] = None,
    ) -> str:
        """
        Render a UTC instant in the user's zone and calendar.

        Persian/Hijri: "YYYY/MM/DD HH:MM:SS"; Gregorian: "YYYY-MM-DD HH:MM:SS".
        CalendarKind.OTHER raises UnsupportedCalendar. A "fa"/"ar" locale hint
        switches the digits to Persian/Arabic-Indic.
        """
        converter = calendars.get_converter(calendar)
        local = self.to_local(utc_value, timezone_id)
        year, month, day = converter.from_civil_instant(local)
        sep = "-" if converter.kind is CalendarKind.GREGORIAN else "/"
        text = (f"{year:04d}{sep}{month:02d}{sep}{day:02d} "
                f"{local.hour:02d}:{local.minute:02d}:{local.second:02d}")
        return digits.localize_digits(text, locale_hint)

    @staticmethod
    def humanize_relative(target: datetime, reference: Optional[datetime] = None) -> str:
        return _humanize(target, reference)

    # ───────────────────  Zones ─────────────────── #

    def try_get_timezone(self, timezone_id: Optional[str]) -> Optional[TimeZoneHandle]:
        """Resolved handle, or None when the identifier is not recognised."""
        try:
            return self.resolver.try_resolve(timezone_id)
        except UnknownZone:
            return None


_default_service: Optional[DateTimeService] = None


def get_default_service() -> DateTimeService:
    """Process-wide service for callers that do not wire their own."""
    global _default_service
    if _default_service is None:
        _default_service = DateTimeService()
    return _default_service
