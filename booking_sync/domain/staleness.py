"""
Staleness policies: decide whether a cache entry needs a background refresh.

An expired entry is still delivered to subscribers; expiry only triggers a refresh.
"""

from abc import ABC, abstractmethod

from booking_sync.domain.booking_cache import CacheEntry

DEFAULT_TTL_SECONDS = 5 * 60


class StalenessPolicy(ABC):

    @abstractmethod
    def is_expired(self, entry: CacheEntry, now: float) -> bool:
        ...


class TtlStalenessPolicy(StalenessPolicy):
    """Expired once the entry is strictly older than ttl_seconds. Age == ttl is fresh."""

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS):
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be >= 0, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds

    def is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.timestamp > self.ttl_seconds


class AlwaysExpiredPolicy(StalenessPolicy):
    """Debug override: every entry is stale, so every publish refreshes."""

    def is_expired(self, entry: CacheEntry, now: float) -> bool:
        return True
