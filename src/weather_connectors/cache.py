"""
TTL Cache

Explicitly constructed, keyed cache for upstream weather responses. Owned
by whoever builds the connectors and passed in; the engine never relies on
it for correctness.
"""

import os
import time
from typing import Any, Callable, Dict, Optional, Tuple
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


DEFAULT_TTL_SECONDS = int(os.getenv("CACHE_TTL_SECONDS", "600"))  # 10 minutes


def make_cache_key(
    city: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    precision: int = 2
) -> str:
    """
    Build a cache key from a coordinate pair or a city label

    Coordinates are rounded so nearby points share an entry; the city label is
    used only when either coordinate is missing.
    """
    if latitude is not None and longitude is not None:
        return f"{round(latitude, precision)},{round(longitude, precision)}"
    return (city or "").strip().lower()


class TTLCache:
    """In-memory key -> value store with a fixed time-to-live"""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time
    ):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}

    def get(self, key: str) -> Optional[Any]:
        """Cached value, or None when missing or expired"""
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, timestamp = entry
        if self.clock() - timestamp >= self.ttl_seconds:
            return None

        logger.info(f"Cache hit for {key}")
        return value

    def set(self, key: str, value: Any, timestamp: Optional[float] = None):
        self._entries[key] = (value, self.clock() if timestamp is None else timestamp)
        self._purge_expired()

    def clear(self):
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _purge_expired(self):
        now = self.clock()
        expired = [
            key for key, (_, timestamp) in self._entries.items()
            if now - timestamp >= self.ttl_seconds
        ]
        for key in expired:
            del self._entries[key]

        if expired:
            logger.info(f"Purged {len(expired)} expired cache entries")
