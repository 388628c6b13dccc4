from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from enum import Enum
from typing import Callable, Optional, Tuple


# Persian and English calendar labels users actually type
_PERSIAN_NAMES = {"persian", "solar", "jalali", "shamsi", "hijri-shamsi", "iranian", "fa"}
_HIJRI_NAMES = {"hijri", "islamic", "lunar", "qamari", "hijri-qamari", "arabic", "ar"}
_GREG_NAMES = {"gregorian", "greg", "miladi", "en"}

_FA_PERSIAN = {"شمسی", "خورشیدی", "جلالی", "هجری شمسی"}
_FA_HIJRI = {"قمری", "هجری قمری"}
_FA_GREG = {"میلادی", "گریگوری", "گرگوری", "گرگوریان"}


class CalendarKind(Enum):
    GREGORIAN = "gregorian"
    PERSIAN = "persian"
    HIJRI = "hijri"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "CalendarKind":
        """Map a loose calendar label ("solar", "شمسی", "Hijri", ...) to a kind.

        Anything unrecognised is `OTHER`; callers decide whether that is an error.
        """
        if isinstance(name, CalendarKind):
            return name
        raw = (name or "").strip()
        key = raw.lower()
        if key in _PERSIAN_NAMES or raw in _FA_PERSIAN:
            return cls.PERSIAN
        if key in _HIJRI_NAMES or raw in _FA_HIJRI:
            return cls.HIJRI
        if key in _GREG_NAMES or raw in _FA_GREG:
            return cls.GREGORIAN
        return cls.OTHER


@dataclass(frozen=True)
class CivilInstant:
    """Wall-clock Gregorian reading with no offset attached."""
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    def to_datetime(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour, self.minute, self.second)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "CivilInstant":
        return cls(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    def as_tuple(self) -> Tuple[int, int, int, int, int, int]:
        return (self.year, self.month, self.day, self.hour, self.minute, self.second)

    def __str__(self) -> str:
        return (f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
                f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}")


@dataclass(frozen=True)
class ParsedDateTimeFields:
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    has_time: bool = False

    def as_tuple(self) -> Tuple[int, int, int, int, int, int]:
        return (self.year, self.month, self.day, self.hour, self.minute, self.second)


@dataclass(frozen=True)
class TimeZoneHandle:
    """Resolved zone: the caller's key plus the tzinfo that computes offsets.

    `fallback` is True when the key was not recognised and UTC stood in for it.
    """
    key: str
    tzinfo: tzinfo
    fallback: bool = False

    def utcoffset(self, naive: datetime) -> timedelta:
        return self.tzinfo.utcoffset(naive.replace(tzinfo=None)) or timedelta(0)


# Anything that turns a zone identifier into a tzinfo, raising on failure
ZoneProvider = Callable[[str], tzinfo]
