"""Shared test fixtures: mocked Supabase client, fake clock, cache store."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set required env vars before any app imports
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-key")

from app.core.cache import CacheStore  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return CacheStore(default_ttl=30, clock=clock)


@pytest.fixture
def mock_supabase():
    """Mock the Supabase client with chainable query builder."""
    mock = MagicMock()

    # Make table().select().eq()... chains return empty data by default
    query = MagicMock()
    query.execute.return_value = MagicMock(data=[])
    query.eq.return_value = query
    query.neq.return_value = query
    query.gt.return_value = query
    query.lt.return_value = query
    query.gte.return_value = query
    query.lte.return_value = query
    query.in_.return_value = query
    query.order.return_value = query
    query.limit.return_value = query
    query.select.return_value = query
    query.insert.return_value = query
    query.update.return_value = query
    query.upsert.return_value = query
    query.delete.return_value = query

    mock.table.return_value = query
    mock.rpc.return_value = query
    mock.query = query
    return mock


async def is_cached(cache: CacheStore, key: str) -> bool:
    """True when key is served without calling the fetcher."""
    probe = AsyncMock(return_value=None)
    await cache.get_or_fetch(key, probe)
    return not probe.called


async def prime(cache: CacheStore, *keys: str):
    for key in keys:
        await cache.get_or_fetch(key, AsyncMock(return_value=f"cached:{key}"))
