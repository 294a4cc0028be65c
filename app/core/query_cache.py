"""
Process-wide cache of query results.

Entries are keyed by query identity (a tuple such as ``("applications",)``).
Callers read through :meth:`QueryCache.fetch` and drop stale results with
:meth:`QueryCache.invalidate` after a successful mutation; entries are never
patched in place.

Every key carries a generation counter that :meth:`invalidate` bumps. A
fetch only stores its result when the generation is unchanged, so a read
that overlaps an invalidation never writes its stale result back.
"""

import logging
import threading
import time
from functools import lru_cache
from typing import Any, Callable, Hashable, Optional, Union

logger = logging.getLogger(__name__)

Ttl = Union[float, Callable[[Any], Optional[float]], None]


class _Entry:
    __slots__ = ("value", "expires_at")

    def __init__(self, value: Any, expires_at: Optional[float]):
        self.value = value
        self.expires_at = expires_at


class QueryCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: dict[Hashable, _Entry] = {}
        self._generations: dict[Hashable, int] = {}
        self._epoch = 0
        self._clock = clock
        self._lock = threading.Lock()

    def _live_entry(self, key: Hashable) -> Optional[_Entry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and self._clock() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry

    def fetch(self, key: Hashable, fetcher: Callable[[], Any], ttl: Ttl = None, refresh: bool = False) -> Any:
        """Return the cached result for ``key`` or run ``fetcher`` and store it.

        ``ttl`` is a lifetime in seconds, or a callable that derives one from
        the fetched value; None keeps the entry until it is invalidated.
        ``refresh`` skips the cached value and always re-runs the fetcher.
        A fetcher that raises leaves the cache untouched and the error propagates.
        """
        with self._lock:
            if not refresh:
                entry = self._live_entry(key)
                if entry is not None:
                    return entry.value
            generation = (self._epoch, self._generations.get(key, 0))

        logger.debug("Fetching %s (refresh=%s)", key, refresh)
        value = fetcher()
        lifetime = ttl(value) if callable(ttl) else ttl

        with self._lock:
            if (self._epoch, self._generations.get(key, 0)) != generation:
                logger.debug("Discarding result for %s, invalidated during fetch", key)
                return value
            expires_at = self._clock() + lifetime if lifetime is not None else None
            self._entries[key] = _Entry(value, expires_at)
        return value

    def invalidate(self, key: Hashable) -> bool:
        with self._lock:
            self._generations[key] = self._generations.get(key, 0) + 1
            existed = self._entries.pop(key, None) is not None
        logger.debug("Invalidated %s (cached=%s)", key, existed)
        return existed

    def clear(self) -> None:
        with self._lock:
            self._epoch += 1
            self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return self._live_entry(key) is not None


@lru_cache(maxsize=1)
def get_query_cache() -> QueryCache:
    return QueryCache()
