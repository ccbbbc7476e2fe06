"""Business overview figures for the landing dashboard."""

import asyncio
import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo

from app.core.cache import DASHBOARD_STATS, CacheStore
from app.core.config import settings
from app.models.schemas import DashboardStats
from app.services.inventory_service import InventoryService
from app.services.order_service import OrderService
from app.services.rate_service import RateService

logger = logging.getLogger(__name__)


def _order_month(order: dict) -> tuple[int, int] | None:
    raw = order.get("order_date")
    if not raw:
        return None
    try:
        d = date.fromisoformat(raw[:10])
    except ValueError:
        return None
    return d.year, d.month


def compute_dashboard_stats(
    orders: list[dict],
    metal_weight_gm: float,
    finished_weight_gm: float,
    latest_rate: dict | None,
    today: date,
) -> DashboardStats:
    this_month = (today.year, today.month)
    monthly = [o for o in orders if _order_month(o) == this_month]
    pending = [o for o in orders if o.get("status") != "Completed"]

    products_made = sum(
        float(item.get("quantity") or 0)
        for o in monthly
        for item in (o.get("items") or [])
    )

    return DashboardStats(
        latest_rate=latest_rate,
        total_silver_stock_kg=(metal_weight_gm + finished_weight_gm) / 1000,
        pending_orders=len(pending),
        pending_value=sum(float(o.get("total_amount") or 0) for o in pending),
        monthly_sales=sum(float(o.get("total_amount") or 0) for o in monthly),
        gst_payable=sum(float(o.get("gst_amount") or 0) for o in monthly),
        products_made=products_made,
    )


class DashboardService:
    def __init__(self, orders: OrderService, inventory: InventoryService, rates: RateService, cache: CacheStore):
        self.orders = orders
        self.inventory = inventory
        self.rates = rates
        self.cache = cache

    async def get_dashboard_stats(self) -> DashboardStats:
        async def _fetch():
            rate, metals, finished_weight, orders = await asyncio.gather(
                self.rates.get_latest_rate(),
                self.inventory.get_metal_inventory(),
                self.inventory.get_finished_goods_weight(),
                self.orders.get_orders(),
            )
            today = datetime.now(ZoneInfo(settings.TIMEZONE)).date()
            return compute_dashboard_stats(
                orders or [],
                sum(m.weight_gm for m in metals),
                finished_weight,
                rate,
                today,
            )

        return await self.cache.get_or_fetch(DASHBOARD_STATS, _fetch)
