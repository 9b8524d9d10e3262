"""Cache-first fare lookup."""

import logging
import threading
from typing import Dict, Optional, Protocol, Tuple

from metrofare.cache import FareCache, get_fare_cache
from metrofare.models import FareRecord
from metrofare.remote import get_fare_resolver

logger = logging.getLogger(__name__)


class FareResolver(Protocol):
    """Anything that can fetch a fare record for a station pair."""

    def resolve(self, origin_id: str, destination_id: str) -> FareRecord:
        ...


class FareLookupService:
    """
    Resolves fare records from the cache, falling back to the remote API.

    A record fetched on a miss is written to the cache before it is
    returned. If that write fails the error propagates and the record is
    not returned.

    Misses for the same pair are serialized by a per-pair lock and the cache
    is checked again once the lock is held, so concurrent requests in one
    process trigger at most one remote call per pair. Locks are kept for the
    life of the service, one per pair ever looked up.
    """

    def __init__(self, cache: FareCache, resolver: FareResolver):
        self.cache = cache
        self.resolver = resolver
        self._locks: Dict[Tuple[str, str], threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, key: Tuple[str, str]) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def resolve_fare(self, origin_id: str, destination_id: str) -> FareRecord:
        """
        Return the fare record for a station pair.

        Raises:
            CacheReadError: The cache file is malformed; the API is not called.
            CacheWriteError: The fetched record could not be cached.
            UpstreamError: Any failure of the remote API; nothing is cached.
        """
        logger.info(f"Fetching metro data for {origin_id} -> {destination_id}")

        record = self.cache.get(origin_id, destination_id)
        if record is not None:
            logger.info(f"Found cached data for {origin_id} -> {destination_id}")
            return record

        with self._lock_for((origin_id, destination_id)):
            record = self.cache.get(origin_id, destination_id)
            if record is not None:
                logger.info(f"Found cached data for {origin_id} -> {destination_id}")
                return record

            logger.info("No cached data found, fetching from API")
            record = self.resolver.resolve(origin_id, destination_id)
            self.cache.put(record)

        logger.info("Successfully cached metro data")
        return record


# Singleton instance
_fare_lookup: Optional[FareLookupService] = None


def get_fare_lookup() -> FareLookupService:
    """Get singleton fare lookup service."""
    global _fare_lookup
    if _fare_lookup is None:
        _fare_lookup = FareLookupService(get_fare_cache(), get_fare_resolver())
    return _fare_lookup
