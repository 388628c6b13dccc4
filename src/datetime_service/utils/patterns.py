import logging
import re
from typing import Optional

from datetime_service.types.datetime_types import ParsedDateTimeFields

logger = logging.getLogger(__name__)

# yyyy/MM/dd, yyyy-MM-dd, yyyy.MM.dd, yyyy MM dd, optionally followed by HH:mm[:ss]
DATE_TIME_RE = re.compile(
    r"^\s*([0-9]{2,4})[/\-.\s]([0-9]{1,2})[/\-.\s]([0-9]{1,2})"
    r"(?:\s+([0-9]{1,2}):([0-9]{1,2})(?::([0-9]{1,2}))?)?\s*$"
)


def match(normalized: Optional[str]) -> Optional[ParsedDateTimeFields]:
    """
    Match a strictly normalized string against the numeric date grammar.

    Returns None when the text does not fit; month/day ranges are not checked
    here, the calendar converter rejects those.
    """
    if not normalized:
        return None
    m = DATE_TIME_RE.match(normalized)
    if not m:
        return None

    try:
        year, month, day = int(m.group(1)), int(m.group(2)), int(m.group(3))
        hour = minute = second = 0
        has_time = m.group(4) is not None
        if has_time:
            hour, minute = int(m.group(4)), int(m.group(5))
            if m.group(6) is not None:
                second = int(m.group(6))
    except ValueError:
        return None

    fields = ParsedDateTimeFields(year, month, day, hour, minute, second, has_time)
    logger.debug("🔎 match: %r → %s", normalized, fields.as_tuple())
    return fields
