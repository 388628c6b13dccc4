import logging
import threading
from datetime import timezone, tzinfo
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from datetime_service.errors import UnknownZone
from datetime_service.types.datetime_types import TimeZoneHandle, ZoneProvider

logger = logging.getLogger(__name__)

UTC_HANDLE = TimeZoneHandle(key="UTC", tzinfo=timezone.utc)


def zoneinfo_provider(identifier: str) -> tzinfo:
    """Default provider: IANA names via zoneinfo (tzdata package as fallback data)."""
    try:
        return ZoneInfo(identifier)
    except ZoneInfoNotFoundError as exc:
        raise UnknownZone(identifier, "not in the zone database") from exc
    except (ValueError, OSError) as exc:
        # malformed keys ("../x", "Asia/") and directory names land here
        raise UnknownZone(identifier, str(exc)) from exc


class TimezoneResolver:
    """
    Resolves zone identifiers to TimeZoneHandles and caches them.

    The cache is append-only for the resolver's lifetime. Inserts happen under a
    lock; reads never take it. Unknown identifiers are cached too, as UTC
    handles flagged `fallback=True`.
    """

    def __init__(self, provider: Optional[ZoneProvider] = None):
        self._provider = provider or zoneinfo_provider
        self._cache: Dict[str, TimeZoneHandle] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._cache)

    def cached_identifiers(self) -> List[str]:
        return list(self._cache)

    def _store(self, identifier: str, handle: TimeZoneHandle) -> TimeZoneHandle:
        with self._lock:
            # a racing resolver may have stored first; everyone reads that one
            return self._cache.setdefault(identifier, handle)

    def _lookup(self, identifier: str) -> TimeZoneHandle:
        try:
            tz = self._provider(identifier)
        except UnknownZone as exc:
            logger.warning("🌐 Unknown timezone %r, falling back to UTC: %s", identifier, exc)
            return TimeZoneHandle(key=identifier, tzinfo=timezone.utc, fallback=True)
        except Exception as exc:
            logger.warning("🌐 Zone provider failed for %r, falling back to UTC: %s", identifier, exc)
            return TimeZoneHandle(key=identifier, tzinfo=timezone.utc, fallback=True)
        logger.debug("🌐 Resolved timezone %r → %r", identifier, tz)
        return TimeZoneHandle(key=identifier, tzinfo=tz)

    def resolve(self, identifier: Optional[str]) -> TimeZoneHandle:
        """Handle for `identifier`; UTC for blank or unrecognised identifiers."""
        if not identifier or not identifier.strip():
            return UTC_HANDLE
        cached = self._cache.get(identifier)
        if cached is not None:
            return cached
        return self._store(identifier, self._lookup(identifier))

    def try_resolve(self, identifier: Optional[str]) -> TimeZoneHandle:
        """Like `resolve`, but raise UnknownZone instead of substituting UTC."""
        handle = self.resolve(identifier)
        if handle.fallback:
            raise UnknownZone(handle.key)
        return handle
