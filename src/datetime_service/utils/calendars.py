import logging
from datetime import date as GDate, datetime
from typing import Dict, Tuple

import jdatetime as jd

from datetime_service.errors import InvalidCalendarDate, UnsupportedCalendar
from datetime_service.types.datetime_types import CalendarKind, CivilInstant

logger = logging.getLogger(__name__)

'''
Calendar converters.

Each converter turns calendar-specific (year, month, day, hour, minute, second)
fields into a Gregorian-backed CivilInstant, and back into (year, month, day).

  * Gregorian: identity, validated by `datetime`.
  * Persian (solar Hijri / Jalali): delegated to jdatetime.
  * Hijri (lunar): tabular Islamic calendar, 30-year cycle,
    leap years 2, 5, 7, 10, 13, 16, 18, 21, 24, 26, 29,
    1 Muharram 1 AH = Julian 16 July 622 (proleptic Gregorian ordinal 227015).

Invalid input surfaces as InvalidCalendarDate, never as a clamped value.
'''

# -----------------------------
# Hijri primitives
# -----------------------------

HIJRI_EPOCH_ORDINAL = 227015
HIJRI_MIN_YEAR = 1
HIJRI_MAX_YEAR = 9666
HIJRI_CYCLE_DAYS = 10631  # 30 * 354 + 11 leap days


def _hijri_is_leap(year: int) -> bool:
    return (14 + 11 * year) % 30 < 11


def _hijri_days_in_month(year: int, month: int) -> int:
    if month == 12 and _hijri_is_leap(year):
        return 30
    return 30 if month % 2 == 1 else 29


def _hijri_to_ordinal(year: int, month: int, day: int) -> int:
    return (
        HIJRI_EPOCH_ORDINAL - 1
        + (year - 1) * 354
        + (3 + 11 * year) // 30         # leap days before `year`
        + (59 * (month - 1) + 1) // 2   # ceil(29.5 * (month - 1))
        + day
    )


def _hijri_from_ordinal(ordinal: int) -> Tuple[int, int, int]:
    year = (30 * (ordinal - HIJRI_EPOCH_ORDINAL) + 10646) // HIJRI_CYCLE_DAYS
    # the closed form can be one off at year boundaries
    while _hijri_to_ordinal(year + 1, 1, 1) <= ordinal:
        year += 1
    while _hijri_to_ordinal(year, 1, 1) > ordinal:
        year -= 1
    start = _hijri_to_ordinal(year, 1, 1)
    month = min(12, -(-2 * (ordinal - start - 29) // 59) + 1)
    day = ordinal - _hijri_to_ordinal(year, month, 1) + 1
    return year, month, day


# -----------------------------
# Converters
# -----------------------------

class CalendarConverter:
    """Base converter; subclasses provide `_to_gregorian` and `_from_gregorian`."""

    kind: CalendarKind = CalendarKind.OTHER

    def _to_gregorian(self, year: int, month: int, day: int) -> GDate:
        raise NotImplementedError

    def _from_gregorian(self, g: GDate) -> Tuple[int, int, int]:
        raise NotImplementedError

    def to_civil_instant(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
    ) -> CivilInstant:
        fields = (year, month, day, hour, minute, second)
        try:
            g = self._to_gregorian(year, month, day)
            dt = datetime(g.year, g.month, g.day, hour, minute, second)
        except (ValueError, OverflowError) as exc:
            logger.debug("📛 %s rejected %s: %s", self.kind.value, fields, exc)
            raise InvalidCalendarDate(self.kind.value, fields, str(exc)) from exc
        return CivilInstant.from_datetime(dt)

    def from_civil_instant(self, civil) -> Tuple[int, int, int]:
        """(year, month, day) in this calendar for a CivilInstant or datetime."""
        g = GDate(civil.year, civil.month, civil.day)
        try:
            return self._from_gregorian(g)
        except (ValueError, OverflowError) as exc:
            raise InvalidCalendarDate(
                self.kind.value, (g.year, g.month, g.day), str(exc)
            ) from exc


class GregorianConverter(CalendarConverter):
    kind = CalendarKind.GREGORIAN

    def _to_gregorian(self, year: int, month: int, day: int) -> GDate:
        return GDate(year, month, day)

    def _from_gregorian(self, g: GDate) -> Tuple[int, int, int]:
        return g.year, g.month, g.day


class PersianConverter(CalendarConverter):
    kind = CalendarKind.PERSIAN

    def _to_gregorian(self, year: int, month: int, day: int) -> GDate:
        return jd.date(year, month, day).togregorian()

    def _from_gregorian(self, g: GDate) -> Tuple[int, int, int]:
        j = jd.date.fromgregorian(date=g)
        return j.year, j.month, j.day


class HijriConverter(CalendarConverter):
    kind = CalendarKind.HIJRI

    def _to_gregorian(self, year: int, month: int, day: int) -> GDate:
        if not HIJRI_MIN_YEAR <= year <= HIJRI_MAX_YEAR:
            raise ValueError(f"year {year} is out of range {HIJRI_MIN_YEAR}..{HIJRI_MAX_YEAR}")
        if not 1 <= month <= 12:
            raise ValueError("month must be in 1..12")
        last = _hijri_days_in_month(year, month)
        if not 1 <= day <= last:
            raise ValueError(f"day must be in 1..{last} for month {month} of {year}")
        return GDate.fromordinal(_hijri_to_ordinal(year, month, day))

    def _from_gregorian(self, g: GDate) -> Tuple[int, int, int]:
        ordinal = g.toordinal()
        if ordinal < HIJRI_EPOCH_ORDINAL:
            raise ValueError(f"{g.isoformat()} is before the Hijri epoch")
        return _hijri_from_ordinal(ordinal)


GREGORIAN = GregorianConverter()
PERSIAN = PersianConverter()
HIJRI = HijriConverter()

CONVERTERS: Dict[CalendarKind, CalendarConverter] = {
    CalendarKind.GREGORIAN: GREGORIAN,
    CalendarKind.PERSIAN: PERSIAN,
    CalendarKind.HIJRI: HIJRI,
}


def get_converter(kind) -> CalendarConverter:
    """Converter for a CalendarKind (or a loose name like "solar")."""
    kind = CalendarKind.from_name(kind)
    try:
        return CONVERTERS[kind]
    except KeyError:
        raise UnsupportedCalendar(kind) from None
