import logging

from supabase import Client

from app.core.cache import EXPENSES_LIST, CacheStore
from app.core.database import execute
from app.models.schemas import ExpenseCreate

logger = logging.getLogger(__name__)


class ExpenseService:
    def __init__(self, db: Client, cache: CacheStore):
        self.db = db
        self.cache = cache

    async def get_expenses(self) -> list[dict]:
        async def _fetch():
            return await execute(self.db.table("expenses").select("*").order("date", desc=True))

        return await self.cache.get_or_fetch(EXPENSES_LIST, _fetch)

    async def create_expense(self, expense: ExpenseCreate) -> dict | None:
        rows = await execute(self.db.table("expenses").insert(expense.model_dump(exclude_none=True)))
        self.cache.invalidate(EXPENSES_LIST)
        logger.info(f"Expense recorded: {expense.head} {expense.amount:.2f}")
        return rows[0] if rows else None
