import logging

from supabase import Client

from app.core.cache import DASHBOARD_STATS, RATE_PREFIX, CacheStore
from app.core.database import execute
from app.models.schemas import SilverRateCreate

logger = logging.getLogger(__name__)

RATE_LATEST = f"{RATE_PREFIX}latest"


class RateService:
    def __init__(self, db: Client, cache: CacheStore):
        self.db = db
        self.cache = cache

    async def get_latest_rate(self) -> dict | None:
        """Most recent silver rate, or None before the first rate is entered."""
        async def _fetch():
            query = (
                self.db.table("silver_rates")
                .select("*")
                .order("rate_date", desc=True)
                .order("created_at", desc=True)
                .limit(1)
            )
            rows = await execute(query)
            return rows[0] if rows else None

        return await self.cache.get_or_fetch(RATE_LATEST, _fetch)

    async def get_rate_history(self, source: str | None = None) -> list[dict]:
        async def _fetch():
            query = self.db.table("silver_rates").select("*").order("rate_date")
            if source:
                query = query.eq("source", source)
            return await execute(query)

        return await self.cache.get_or_fetch(f"{RATE_PREFIX}history:{source or 'all'}", _fetch)

    async def add_silver_rate(self, rate: SilverRateCreate) -> dict | None:
        payload = rate.model_dump(exclude_none=True)
        payload["rate_1g"] = rate.rate_10g / 10
        rows = await execute(self.db.table("silver_rates").insert(payload))

        self.cache.invalidate_pattern(RATE_PREFIX)
        self.cache.invalidate(DASHBOARD_STATS)
        logger.info(f"Silver rate {rate.rate_10g:g}/10g ({rate.source}) added for {rate.rate_date}")
        return rows[0] if rows else None
