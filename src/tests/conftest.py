from datetime import timedelta, timezone

import pytest

from datetime_service.errors import UnknownZone
from datetime_service.service import DateTimeService
from datetime_service.utils.timezones import TimezoneResolver

# Fixed-offset zones for tests that must not depend on the host zone database
FIXED_ZONES = {
    "Test/Tehran": timezone(timedelta(hours=3, minutes=30)),
    "Test/NewYork": timezone(timedelta(hours=-5)),
    "Test/Kabul": timezone(timedelta(hours=4, minutes=30)),
}


def pytest_addoption(parser):
    parser.addoption(
        "--default-tz",
        action="store",
        default="UTC",
        help="Default timezone for the `service` fixture (default: UTC)",
    )


class FixedProvider:
    """Zone provider over FIXED_ZONES that records every lookup."""

    def __init__(self, zones=None):
        self.zones = dict(FIXED_ZONES if zones is None else zones)
        self.calls = []

    def __call__(self, identifier):
        self.calls.append(identifier)
        try:
            return self.zones[identifier]
        except KeyError:
            raise UnknownZone(identifier) from None


@pytest.fixture
def fixed_provider():
    return FixedProvider()


@pytest.fixture
def service(request):
    """DateTimeService over the real zone database with a fresh cache."""
    return DateTimeService(
        resolver=TimezoneResolver(),
        default_timezone=request.config.getoption("--default-tz"),
    )


@pytest.fixture
def fixed_service(fixed_provider):
    """DateTimeService whose zones come from FIXED_ZONES only."""
    return DateTimeService(resolver=TimezoneResolver(fixed_provider), default_timezone="UTC")
