"""In-memory read cache with TTL expiry, single-flight fetches and prefix invalidation.

One CacheStore is built per process (see app.main) and handed to every
data-access service. Writes call invalidate()/invalidate_pattern() right after
they succeed so the next read goes back to the database.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

# Key conventions shared by the services. Families end with their prefix so a
# single invalidate_pattern() call covers every view in the family.
ORDERS_LIST = "orders_list"
DASHBOARD_STATS = "dashboard_stats"
STOCK_PREFIX = "stock_"
RATE_PREFIX = "rate_"
KARIGARS_LIST = "karigars_list"
KARIGAR_WORK_PREFIX = "karigar_work:"
PRODUCTS_LIST = "products_list"
JOB_WORK_ITEMS = "job_work_items"
EXPENSES_LIST = "expenses_list"


@dataclass
class CacheEntry:
    key: str
    value: Any
    expires_at: float


class CacheStore:
    """Process-wide key/value cache for expensive reads.

    The store is only touched from the event loop thread and never yields
    between checking for an entry and marking a fetch in flight, so no lock
    is needed.
    """

    def __init__(self, default_ttl: float = 30.0, clock: Callable[[], float] = time.monotonic):
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._in_flight: dict[str, asyncio.Task] = {}

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def in_flight(self) -> list[str]:
        return list(self._in_flight)

    async def get_or_fetch(self, key: str, fetch_fn: Callable[[], Awaitable[Any]], ttl: float | None = None) -> Any:
        """Return the cached value for key, fetching it at most once at a time.

        fetch_fn is a zero-argument coroutine function. Its exceptions reach
        every caller waiting on the same fetch and are never cached.
        """
        entry = self._entries.get(key)
        if entry is not None:
            if self._clock() < entry.expires_at:
                logger.debug(f"Cache hit: {key}")
                return entry.value
            self._entries.pop(key, None)

        task = self._in_flight.get(key)
        if task is not None:
            logger.debug(f"Joining in-flight fetch: {key}")
        else:
            logger.debug(f"Cache miss: {key}")
            ttl = self.default_ttl if ttl is None else ttl
            task = asyncio.ensure_future(self._fetch(key, fetch_fn, ttl))
            task.add_done_callback(_consume_exception)
            self._in_flight[key] = task

        # A cancelled caller must not cancel the fetch other callers share.
        return await asyncio.shield(task)

    async def _fetch(self, key: str, fetch_fn: Callable[[], Awaitable[Any]], ttl: float) -> Any:
        try:
            value = await fetch_fn()
            self._entries[key] = CacheEntry(key=key, value=value, expires_at=self._clock() + ttl)
            return value
        finally:
            self._in_flight.pop(key, None)

    def invalidate(self, key: str) -> None:
        """Drop one entry. A fetch already running for key is left alone."""
        if self._entries.pop(key, None) is not None:
            logger.debug(f"Invalidated: {key}")

    def invalidate_pattern(self, prefix: str) -> None:
        """Drop every entry whose key starts with prefix.

        This is a plain string-prefix match, not a glob or regex.
        """
        matched = [k for k in self._entries if k.startswith(prefix)]
        for k in matched:
            del self._entries[k]
        if matched:
            logger.debug(f"Invalidated {len(matched)} entries with prefix '{prefix}'")

    def clear(self) -> None:
        self._entries.clear()
        logger.info("Cache cleared")


def _consume_exception(task: asyncio.Task) -> None:
    # Mark the failure as retrieved when every waiter went away before it finished.
    if not task.cancelled():
        task.exception()
