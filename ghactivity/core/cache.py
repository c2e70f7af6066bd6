"""
In-memory TTL cache for GitHub API responses.

Entries are keyed by the fully-qualified request URL (query string included)
and live as long as the owning client.
"""

import math
import time
from typing import Any, Callable, Optional

from cachetools import TTLCache  # type: ignore[import-untyped]

from ghactivity.core.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TTL_MS = 900_000  # 15 minutes


class FetchCache:
    """
    Time-bounded memoization of decoded JSON bodies.

    An entry is served while ``now - stored_at < ttl``. There is no size
    bound. Concurrent misses on the same key are not deduplicated; both
    callers fetch and the later ``put`` wins.
    """

    def __init__(
        self,
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Args:
            ttl_ms: Time-to-live in milliseconds
            clock: Returns the current time in seconds (default: time.monotonic)
        """
        self.ttl_ms = ttl_ms
        self._entries: TTLCache[str, Any] = TTLCache(
            maxsize=math.inf,
            ttl=ttl_ms / 1000,
            timer=clock or time.monotonic,
        )

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value for key, or None on a miss."""
        value = self._entries.get(key)
        if value is not None:
            logger.debug(f"Cache HIT: {key}")
        return value

    def put(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def __len__(self) -> int:
        return len(self._entries)
