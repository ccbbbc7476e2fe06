"""GST registers: output tax on orders, input tax credit on expenses."""

import logging
from typing import Literal

from supabase import Client

from app.core.database import execute
from app.models.schemas import GSTSummaryItem

logger = logging.getLogger(__name__)


def month_bounds(month: str) -> tuple[str, str]:
    """'YYYY-MM' -> (first day, first day of next month), both YYYY-MM-DD."""
    year, m = (int(part) for part in month.split("-"))
    if not 1 <= m <= 12:
        raise ValueError(f"Invalid month: {month}")
    next_year, next_month = (year + 1, 1) if m == 12 else (year, m + 1)
    return f"{year:04d}-{m:02d}-01", f"{next_year:04d}-{next_month:02d}-01"


def calculate_gst_summary(items: list[dict], kind: Literal["output", "input"]) -> list[GSTSummaryItem]:
    """Group orders (output) or expenses (input) by GST rate.

    Orders carry subtotal/total_amount; expenses carry amount and their total
    is amount + GST.
    """
    summary: dict[float, GSTSummaryItem] = {}

    for item in items:
        rate = float(item.get("gst_rate") or 0)
        if "subtotal" in item:
            taxable = float(item.get("subtotal") or 0)
        else:
            taxable = float(item.get("amount") or 0)
        gst = float(item.get("gst_amount") or 0)
        if "total_amount" in item:
            total = float(item.get("total_amount") or 0)
        else:
            total = taxable + gst

        row = summary.setdefault(rate, GSTSummaryItem(rate=rate, type=kind))
        row.taxable_value += taxable
        row.gst_amount += gst
        row.total_amount += total

    return sorted(summary.values(), key=lambda r: r.rate)


class GSTService:
    def __init__(self, db: Client):
        self.db = db

    async def get_gst_orders(self, month: str | None = None) -> list[dict]:
        query = (
            self.db.table("orders")
            .select("*")
            .eq("gst_enabled", True)
            .order("order_date", desc=True)
        )
        if month:
            start, end = month_bounds(month)
            query = query.gte("order_date", start).lt("order_date", end)
        return await execute(query)

    async def get_itc_expenses(self, month: str | None = None) -> list[dict]:
        query = (
            self.db.table("expenses")
            .select("*")
            .eq("gst_enabled", True)
            .order("date", desc=True)
        )
        if month:
            start, end = month_bounds(month)
            query = query.gte("date", start).lt("date", end)
        return await execute(query)

    async def get_gst_report(self, month: str | None = None) -> dict:
        orders = await self.get_gst_orders(month)
        expenses = await self.get_itc_expenses(month)
        output = calculate_gst_summary(orders or [], "output")
        itc = calculate_gst_summary(expenses or [], "input")
        output_tax = sum(r.gst_amount for r in output)
        input_tax = sum(r.gst_amount for r in itc)
        return {
            "month": month,
            "output": output,
            "input": itc,
            "output_tax": round(output_tax, 2),
            "input_tax_credit": round(input_tax, 2),
            "net_payable": round(output_tax - input_tax, 2),
        }
