import logging

from supabase import Client

from app.core.cache import DASHBOARD_STATS, KARIGAR_WORK_PREFIX, KARIGARS_LIST, CacheStore
from app.core.database import execute
from app.models.schemas import KarigarCreate
from app.services.gst_service import month_bounds

logger = logging.getLogger(__name__)


class KarigarService:
    def __init__(self, db: Client, cache: CacheStore):
        self.db = db
        self.cache = cache

    async def get_karigars(self) -> list[dict]:
        async def _fetch():
            return await execute(self.db.table("karigars").select("*").order("name"))

        return await self.cache.get_or_fetch(KARIGARS_LIST, _fetch)

    async def create_karigar(self, karigar: KarigarCreate) -> dict | None:
        rows = await execute(self.db.table("karigars").insert(karigar.model_dump()))
        self.cache.invalidate(KARIGARS_LIST)
        logger.info(f"Karigar added: {karigar.name}")
        return rows[0] if rows else None

    async def get_karigar_work_history(self, karigar_id: str | None = None, month: str | None = None) -> list[dict]:
        """Work records, newest first. month is YYYY-MM."""
        async def _fetch():
            query = (
                self.db.table("karigar_work_records")
                .select("*, karigars(name)")
                .order("work_date", desc=True)
            )
            if karigar_id:
                query = query.eq("karigar_id", karigar_id)
            if month:
                start, end = month_bounds(month)
                query = query.gte("work_date", start).lt("work_date", end)
            return await execute(query)

        key = f"{KARIGAR_WORK_PREFIX}{karigar_id or 'all'}:{month or 'all'}"
        return await self.cache.get_or_fetch(key, _fetch)

    async def settle_karigar_payments(self, ids: list[str], payment_date: str, payment_mode: str) -> None:
        query = (
            self.db.table("karigar_work_records")
            .update({
                "payment_status": "PAID",
                "payment_date": payment_date,
                "payment_mode": payment_mode,
            })
            .in_("id", ids)
        )
        await execute(query)

        self.cache.invalidate_pattern(KARIGAR_WORK_PREFIX)
        self.cache.invalidate(DASHBOARD_STATS)
        logger.info(f"Settled {len(ids)} karigar work records via {payment_mode}")
