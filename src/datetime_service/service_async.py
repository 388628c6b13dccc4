from datetime import datetime
from typing import Optional

from datetime_service.service import DateTimeService, LocalValue
from datetime_service.types.datetime_types import TimeZoneHandle


class AsyncDateTimeService:
    """
    Coroutine facade over DateTimeService for callers that are async all the way.

    The work is CPU-bound and short, so every method runs inline and returns.
    """

    def __init__(self, inner: Optional[DateTimeService] = None):
        self.inner = inner or DateTimeService()

    async def parse_persian(self, text: Optional[str], timezone_id: Optional[str] = None) -> datetime:
        return self.inner.parse_persian(text, timezone_id)

    async def try_parse_persian(self, text: Optional[str], timezone_id: Optional[str] = None) -> Optional[datetime]:
        return self.inner.try_parse_persian(text, timezone_id)

    async def parse_any(self, text: Optional[str], timezone_id: Optional[str] = None) -> datetime:
        return self.inner.parse_any(text, timezone_id)

    async def try_parse_any(self, text: Optional[str], timezone_id: Optional[str] = None) -> Optional[datetime]:
        return self.inner.try_parse_any(text, timezone_id)

    async def to_utc(self, local: LocalValue, timezone_id: Optional[str] = None) -> datetime:
        return self.inner.to_utc(local, timezone_id)

    async def format_for_user(
        self,
        utc_value: datetime,
        timezone_id: Optional[str],
        calendar,
        locale_hint: Optional[str] = None,
    ) -> str:
        return self.inner.format_for_user(utc_value, timezone_id, calendar, locale_hint)

    async def normalize_for_date(self, text: Optional[str]) -> str:
        return self.inner.normalize_for_date(text)

    async def humanize_relative(self, target: datetime, reference: Optional[datetime] = None) -> str:
        return self.inner.humanize_relative(target, reference)

    async def try_get_timezone(self, timezone_id: Optional[str]) -> Optional[TimeZoneHandle]:
        return self.inner.try_get_timezone(timezone_id)
