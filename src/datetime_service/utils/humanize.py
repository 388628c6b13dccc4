from datetime import datetime, timezone
from typing import Optional

MINUTE = 60
HOUR = 3600
DAY = 86400


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _phrase(count: int, unit: str, future: bool) -> str:
    label = f"{count} {unit}{'' if count == 1 else 's'}"
    return f"in {label}" if future else f"{label} ago"


def humanize_relative(target: datetime, reference: Optional[datetime] = None) -> str:
    """
    Coarse English distance between `target` and `reference` (default: now).

    "just now" / "in a few seconds" under a minute, then minutes, hours and
    days rounded to the nearest unit. Naive datetimes are taken as UTC.
    """
    if reference is None:
        reference = datetime.now(timezone.utc)
    delta = (_as_utc(reference) - _as_utc(target)).total_seconds()
    future = delta < 0
    seconds = abs(delta)

    if seconds < MINUTE:
        return "in a few seconds" if future else "just now"
    if seconds < HOUR:
        return _phrase(round(seconds / MINUTE), "minute", future)
    if seconds < DAY:
        return _phrase(round(seconds / HOUR), "hour", future)
    return _phrase(round(seconds / DAY), "day", future)
