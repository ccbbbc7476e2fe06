"""Stock ledger tallies for raw silver, wastage and finished goods."""

import logging

from supabase import Client

from app.core.cache import DASHBOARD_STATS, STOCK_PREFIX, CacheStore
from app.core.database import execute
from app.models.schemas import MetalInventory, StockSummary, StockTransactionCreate

logger = logging.getLogger(__name__)

RECENT_TRANSACTIONS_LIMIT = 50


def summarize_transactions(transactions: list[dict], current_silver_rate: float) -> StockSummary:
    """Fold the stock ledger into running balances.

    Quantities are grams for RAW_SILVER/WASTAGE and pieces for FINISHED_GOODS,
    whose weight is tracked separately in weight_gm. current_silver_rate is
    per kg.
    """
    raw = 0.0
    wastage = 0.0
    fg_count = 0.0
    fg_weight = 0.0

    for t in transactions:
        qty = float(t.get("quantity") or 0)
        weight = float(t.get("weight_gm") or 0)
        kind = t.get("type")
        item_type = t.get("item_type")

        if item_type == "RAW_SILVER":
            if kind == "RAW_IN":
                raw += qty
            elif kind in ("RAW_OUT", "PRODUCTION", "ADJUSTMENT"):
                raw -= qty
        elif item_type == "WASTAGE":
            if kind == "WASTAGE":
                wastage += qty
            elif kind == "ADJUSTMENT":
                wastage -= qty
        elif item_type == "FINISHED_GOODS":
            if kind == "PRODUCTION":
                fg_count += qty
                fg_weight += weight
            elif kind in ("ORDER_DEDUCTION", "ADJUSTMENT"):
                fg_count -= qty
                fg_weight -= weight

    return StockSummary(
        raw_silver=raw,
        wastage=wastage,
        finished_goods_count=fg_count,
        finished_goods_weight=fg_weight,
        total_value=(raw + wastage + fg_weight) * (current_silver_rate / 1000),
    )


class InventoryService:
    def __init__(self, db: Client, cache: CacheStore):
        self.db = db
        self.cache = cache

    async def get_stock_summary(self, current_silver_rate: float = 0) -> StockSummary:
        async def _fetch():
            rows = await execute(self.db.table("stock_transactions").select("*"))
            return summarize_transactions(rows or [], current_silver_rate)

        return await self.cache.get_or_fetch(f"{STOCK_PREFIX}summary:{float(current_silver_rate)!r}", _fetch)

    async def get_stock_transactions(self, item_type: str | None = None) -> list[dict]:
        async def _fetch():
            query = (
                self.db.table("stock_transactions")
                .select("*")
                .order("created_at", desc=True)
                .limit(RECENT_TRANSACTIONS_LIMIT)
            )
            if item_type:
                query = query.eq("item_type", item_type)
            return await execute(query)

        return await self.cache.get_or_fetch(f"{STOCK_PREFIX}transactions:{item_type or 'all'}", _fetch)

    async def get_finished_goods_inventory(self) -> list[dict]:
        async def _fetch():
            query = self.db.table("products").select("*").eq("is_active", True).order("name")
            return await execute(query)

        return await self.cache.get_or_fetch(f"{STOCK_PREFIX}finished_goods", _fetch)

    async def add_stock_transaction(self, transaction: StockTransactionCreate) -> dict | None:
        payload = transaction.model_dump(exclude_none=True)
        rows = await execute(self.db.table("stock_transactions").insert([payload]))

        self.cache.invalidate_pattern(STOCK_PREFIX)
        self.cache.invalidate(DASHBOARD_STATS)
        logger.info(f"Stock {transaction.type} recorded: {transaction.quantity:g} {transaction.item_type}")
        return rows[0] if rows else None

    async def get_metal_inventory(self) -> list[MetalInventory]:
        summary = await self.get_stock_summary(0)
        return [
            MetalInventory(id="raw", name="Raw Silver", weight_gm=summary.raw_silver),
            MetalInventory(id="wastage", name="Wastage Silver", weight_gm=summary.wastage),
        ]

    async def get_finished_goods_weight(self) -> float:
        summary = await self.get_stock_summary(0)
        return summary.finished_goods_weight
