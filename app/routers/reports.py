from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.models.schemas import DashboardStats, PLReport
from app.routers.deps import get_accounting_service, get_dashboard_service, get_gst_service
from app.services.accounting_service import AccountingService
from app.services.dashboard_service import DashboardService
from app.services.gst_service import GSTService

router = APIRouter(tags=["reports"])


@router.get("/dashboard", response_model=DashboardStats)
async def dashboard(dashboard: DashboardService = Depends(get_dashboard_service)):
    return await dashboard.get_dashboard_stats()


@router.get("/reports/pl", response_model=PLReport)
async def pl_report(accounting: AccountingService = Depends(get_accounting_service)):
    return await accounting.get_pl_report()


@router.get("/reports/statement/{customer_name}")
async def customer_statement(customer_name: str, accounting: AccountingService = Depends(get_accounting_service)):
    return await accounting.get_customer_statement(customer_name)


@router.get("/reports/gst")
async def gst_report(
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$"),
    gst: GSTService = Depends(get_gst_service),
):
    return await gst.get_gst_report(month)
