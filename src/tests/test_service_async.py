import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from datetime_service.errors import NoPatternMatch
from datetime_service.service_async import AsyncDateTimeService
from datetime_service.types.datetime_types import CalendarKind, CivilInstant

UTC = timezone.utc


@pytest.fixture
def async_service(fixed_service):
    return AsyncDateTimeService(fixed_service)


def test_async_parse_and_format(async_service):
    async def flow():
        utc = await async_service.parse_persian("۱۴۰۲/۰۵/۰۱ ۱۲:۰۵", "Test/Tehran")
        text = await async_service.format_for_user(utc, "Test/Tehran", CalendarKind.PERSIAN, "fa")
        return utc, text

    utc, text = asyncio.run(flow())
    assert utc == datetime(2023, 7, 23, 8, 35, tzinfo=UTC)
    assert text == "۱۴۰۲/۰۵/۰۱ ۱۲:۰۵:۰۰"


def test_async_matches_sync(async_service, fixed_service):
    text = "2025-03-01T12:30:00+03:00"
    assert asyncio.run(async_service.parse_any(text, "Test/Kabul")) == fixed_service.parse_any(text, "Test/Kabul")
    assert asyncio.run(async_service.to_utc(CivilInstant(2024, 1, 1), "Test/NewYork")) == \
        datetime(2024, 1, 1, 5, tzinfo=UTC)
    assert asyncio.run(async_service.normalize_for_date("۱۴۰۲/۰۵/۱۱ ساعت")) == "1402/05/11"


def test_async_try_variants(async_service):
    assert asyncio.run(async_service.try_parse_persian("nonsense", "UTC")) is None
    assert asyncio.run(async_service.try_parse_any("", "UTC")) is None
    assert asyncio.run(async_service.try_get_timezone("Unknown/Zone")) is None
    assert asyncio.run(async_service.try_get_timezone("Test/Kabul")).key == "Test/Kabul"


def test_async_errors_propagate(async_service):
    with pytest.raises(NoPatternMatch):
        asyncio.run(async_service.parse_any("not a date at all", "UTC"))


def test_async_humanize(async_service):
    now = datetime(2025, 1, 1, tzinfo=UTC)
    assert asyncio.run(async_service.humanize_relative(now + timedelta(hours=2), now)) == "in 2 hours"


def test_async_default_inner_service():
    svc = AsyncDateTimeService()
    assert asyncio.run(svc.parse_persian("1402/05/11", "UTC")) == datetime(2023, 8, 2, tzinfo=UTC)
