"""FastAPI dependencies wiring the Supabase client and the process cache into services."""

from fastapi import Depends, Request
from supabase import Client

from app.core.cache import CacheStore
from app.core.database import get_supabase
from app.services.accounting_service import AccountingService
from app.services.dashboard_service import DashboardService
from app.services.expense_service import ExpenseService
from app.services.gst_service import GSTService
from app.services.inventory_service import InventoryService
from app.services.job_work_service import JobWorkService
from app.services.karigar_service import KarigarService
from app.services.order_service import OrderService
from app.services.product_service import ProductService
from app.services.rate_service import RateService


def get_db() -> Client:
    return get_supabase()


def get_cache(request: Request) -> CacheStore:
    return request.app.state.cache


def get_order_service(db: Client = Depends(get_db), cache: CacheStore = Depends(get_cache)) -> OrderService:
    return OrderService(db, cache)


def get_inventory_service(db: Client = Depends(get_db), cache: CacheStore = Depends(get_cache)) -> InventoryService:
    return InventoryService(db, cache)


def get_rate_service(db: Client = Depends(get_db), cache: CacheStore = Depends(get_cache)) -> RateService:
    return RateService(db, cache)


def get_karigar_service(db: Client = Depends(get_db), cache: CacheStore = Depends(get_cache)) -> KarigarService:
    return KarigarService(db, cache)


def get_expense_service(db: Client = Depends(get_db), cache: CacheStore = Depends(get_cache)) -> ExpenseService:
    return ExpenseService(db, cache)


def get_product_service(db: Client = Depends(get_db), cache: CacheStore = Depends(get_cache)) -> ProductService:
    return ProductService(db, cache)


def get_job_work_service(db: Client = Depends(get_db), cache: CacheStore = Depends(get_cache)) -> JobWorkService:
    return JobWorkService(db, cache)


def get_accounting_service(db: Client = Depends(get_db)) -> AccountingService:
    return AccountingService(db)


def get_gst_service(db: Client = Depends(get_db)) -> GSTService:
    return GSTService(db)


def get_dashboard_service(
    orders: OrderService = Depends(get_order_service),
    inventory: InventoryService = Depends(get_inventory_service),
    rates: RateService = Depends(get_rate_service),
    cache: CacheStore = Depends(get_cache),
) -> DashboardService:
    return DashboardService(orders, inventory, rates, cache)
