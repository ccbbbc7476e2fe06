import logging

from supabase import Client

from app.core.cache import JOB_WORK_ITEMS, CacheStore
from app.core.database import execute
from app.models.schemas import JobWorkItemCreate, JobWorkItemUpdate

logger = logging.getLogger(__name__)


class JobWorkService:
    def __init__(self, db: Client, cache: CacheStore):
        self.db = db
        self.cache = cache

    async def get_job_work_items(self) -> list[dict]:
        async def _fetch():
            return await execute(self.db.table("job_work_items").select("*").eq("is_active", True).order("name"))

        return await self.cache.get_or_fetch(JOB_WORK_ITEMS, _fetch)

    async def add_job_work_item(self, item: JobWorkItemCreate) -> dict | None:
        rows = await execute(self.db.table("job_work_items").insert([item.model_dump()]))
        self.cache.invalidate(JOB_WORK_ITEMS)
        return rows[0] if rows else None

    async def update_job_work_item(self, item_id: str, updates: JobWorkItemUpdate) -> None:
        payload = updates.model_dump(exclude_none=True)
        if not payload:
            return
        await execute(self.db.table("job_work_items").update(payload).eq("id", item_id))
        self.cache.invalidate(JOB_WORK_ITEMS)

    async def delete_job_work_item(self, item_id: str) -> None:
        await execute(self.db.table("job_work_items").update({"is_active": False}).eq("id", item_id))
        self.cache.invalidate(JOB_WORK_ITEMS)
        logger.info(f"Job work item deactivated: {item_id}")
