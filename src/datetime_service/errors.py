"""
Exception hierarchy for the date-time service.

Every error derives from `DateTimeServiceError`, itself a `ValueError`, so
callers that only care about "bad input" can catch `ValueError`.
"""
from typing import Optional


class DateTimeServiceError(ValueError):
    """Base class for all date-time service errors."""


class NoPatternMatch(DateTimeServiceError):
    """Input text does not conform to any recognised date/time grammar."""

    def __init__(self, text: Optional[str]):
        self.text = text
        super().__init__(f"No date pattern matched: {text!r}")


class InvalidCalendarDate(DateTimeServiceError):
    """Well-formed fields that do not name a real date in the chosen calendar."""

    def __init__(self, calendar: str, fields: tuple, reason: str = ""):
        self.calendar = calendar
        self.fields = fields
        self.reason = reason
        msg = f"Invalid {calendar} date {fields}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class UnknownZone(DateTimeServiceError):
    """Timezone identifier not recognised by the zone provider."""

    def __init__(self, identifier: str, reason: str = ""):
        self.identifier = identifier
        self.reason = reason
        msg = f"Unknown timezone: {identifier!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class UnsupportedCalendar(DateTimeServiceError):
    """Calendar kind has no converter (e.g. CalendarKind.OTHER)."""

    def __init__(self, calendar):
        self.calendar = calendar
        super().__init__(f"Unsupported calendar: {calendar!r}")
