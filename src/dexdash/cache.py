"""In-memory TTL cache shared by all dashboard endpoints.

Upstream providers are rate limited, so every endpoint memoizes its
upstream result for a short window keyed by endpoint and query.
"""

import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from dexdash.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class TTLCache:
    """Key -> value memoizer with expiry.

    An entry is live while ``now - stored_at < ttl``. Expired entries are
    treated as absent and overwritten on the next computation; there is no
    background sweep and no size bound (the key space is one key per distinct
    query seen).

    Known race: ``get_or_compute`` awaits the producer between the lookup and
    the store, so concurrent requests for the same missing or expired key may
    each invoke the producer. The last one to finish wins. This only costs a
    duplicate upstream call.

    Args:
        ttl_ms: Entry lifetime in milliseconds.
        clock: Returns the current time in seconds. Defaults to
            ``time.monotonic``; tests inject a fake clock.
    """

    def __init__(
        self,
        ttl_ms: int = 15000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl_ms / 1000
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    @property
    def ttl_ms(self) -> int:
        return int(self._ttl_seconds * 1000)

    async def get_or_compute(self, key: str, producer: Callable[[], Awaitable[T]]) -> T:
        """Return the live value for ``key`` or compute and store a new one.

        Producer failures propagate and leave the cache untouched, so a failed
        upstream call is retried by the next request.
        """
        now = self._clock()
        entry = self._entries.get(key)
        if entry is not None and now - entry[0] < self._ttl_seconds:
            return entry[1]

        logger.debug("cache_miss", key=key)
        value = await producer()
        self._entries[key] = (now, value)
        return value

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
