"""Supabase client and the async query executor every service goes through."""

import asyncio
import logging
from functools import lru_cache

from supabase import Client, create_client

from app.core.config import settings

logger = logging.getLogger(__name__)


@lru_cache
def get_supabase() -> Client:
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


async def execute(query, timeout: float | None = None):
    """Run a PostgREST query builder off the event loop and return its rows.

    The call is bounded by DB_TIMEOUT_SECONDS so a stuck request fails with
    TimeoutError instead of hanging every cache waiter behind it.
    """
    timeout = settings.DB_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        response = await asyncio.wait_for(asyncio.to_thread(query.execute), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(f"Database call timed out after {timeout}s")
        raise
    return response.data
