"""Profit & loss and customer ledger statements from the posted transactions."""

import logging

from supabase import Client

from app.core.database import execute
from app.models.schemas import PLReport

logger = logging.getLogger(__name__)

JOB_WORK_INCOME = "Job Work Income"
PRODUCT_SALES_INCOME = "Product Sales Income"
KARIGAR_EXPENSE_HEAD = "Karigar Payment"


def build_pl_report(income_rows: list[dict], expense_rows: list[dict]) -> PLReport:
    def _ledger(row: dict) -> str | None:
        return (row.get("ledgers") or {}).get("name")

    job_work = sum(float(r.get("credit") or 0) for r in income_rows if _ledger(r) == JOB_WORK_INCOME)
    sales = sum(float(r.get("credit") or 0) for r in income_rows if _ledger(r) == PRODUCT_SALES_INCOME)

    karigar = 0.0
    general = 0.0
    for e in expense_rows:
        amount = float(e.get("amount") or 0)
        if (e.get("head") or "").startswith(KARIGAR_EXPENSE_HEAD):
            karigar += amount
        else:
            general += amount

    total_expenses = general + karigar
    return PLReport(
        job_work_income=job_work,
        product_sales_income=sales,
        general_expenses=general,
        karigar_expenses=karigar,
        total_expenses=total_expenses,
        net_profit=(job_work + sales) - total_expenses,
    )


class AccountingService:
    def __init__(self, db: Client):
        self.db = db

    async def get_pl_report(self) -> PLReport:
        income = await execute(
            self.db.table("transactions")
            .select("ledgers!inner(name), credit")
            .in_("ledgers.name", [JOB_WORK_INCOME, PRODUCT_SALES_INCOME])
        )
        expenses = await execute(self.db.table("expenses").select("head, amount"))
        return build_pl_report(income or [], expenses or [])

    async def get_customer_statement(self, customer_name: str) -> list[dict]:
        query = (
            self.db.table("transactions")
            .select("*, ledgers!inner(name)")
            .eq("ledgers.name", customer_name)
            .order("date")
        )
        return await execute(query)
