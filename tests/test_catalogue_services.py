"""Tests for the rate, karigar, product, job work and expense services."""

import pytest

from app.core.cache import (
    DASHBOARD_STATS,
    EXPENSES_LIST,
    JOB_WORK_ITEMS,
    KARIGARS_LIST,
    ORDERS_LIST,
    PRODUCTS_LIST,
)
from app.models.schemas import (
    ExpenseCreate,
    JobWorkItemUpdate,
    KarigarCreate,
    ProductCreate,
    ProductUpdate,
    SilverRateCreate,
)
from app.services.expense_service import ExpenseService
from app.services.job_work_service import JobWorkService
from app.services.karigar_service import KarigarService
from app.services.product_service import ProductService
from app.services.rate_service import RATE_LATEST, RateService
from conftest import is_cached, prime


class TestRateService:
    @pytest.mark.asyncio
    async def test_latest_rate_none_when_empty(self, mock_supabase, cache):
        service = RateService(mock_supabase, cache)
        assert await service.get_latest_rate() is None
        mock_supabase.query.limit.assert_called_with(1)

    @pytest.mark.asyncio
    async def test_latest_rate_returns_first_row(self, mock_supabase, cache):
        mock_supabase.query.execute.return_value.data = [{"rate_10g": 950}]
        service = RateService(mock_supabase, cache)
        assert await service.get_latest_rate() == {"rate_10g": 950}

    @pytest.mark.asyncio
    async def test_add_rate_computes_gram_rate_and_invalidates(self, mock_supabase, cache):
        await prime(cache, RATE_LATEST, "rate_history:all", DASHBOARD_STATS, ORDERS_LIST)
        service = RateService(mock_supabase, cache)

        await service.add_silver_rate(SilverRateCreate(rate_date="2024-11-05", source="MCX", rate_10g=955))

        payload = mock_supabase.query.insert.call_args[0][0]
        assert payload["rate_1g"] == 95.5
        assert "notes" not in payload
        assert not await is_cached(cache, RATE_LATEST)
        assert not await is_cached(cache, "rate_history:all")
        assert not await is_cached(cache, DASHBOARD_STATS)
        assert await is_cached(cache, ORDERS_LIST)


class TestKarigarService:
    @pytest.mark.asyncio
    async def test_karigars_cached(self, mock_supabase, cache):
        service = KarigarService(mock_supabase, cache)
        await service.get_karigars()
        await service.get_karigars()
        assert mock_supabase.query.execute.call_count == 1

    @pytest.mark.asyncio
    async def test_create_karigar_invalidates_list(self, mock_supabase, cache):
        await prime(cache, KARIGARS_LIST)
        service = KarigarService(mock_supabase, cache)
        await service.create_karigar(KarigarCreate(name="Suresh", work_type="Choti"))
        assert not await is_cached(cache, KARIGARS_LIST)

    @pytest.mark.asyncio
    async def test_work_history_month_filter(self, mock_supabase, cache):
        service = KarigarService(mock_supabase, cache)
        await service.get_karigar_work_history("k-1", "2024-02")

        mock_supabase.query.eq.assert_called_with("karigar_id", "k-1")
        mock_supabase.query.gte.assert_called_with("work_date", "2024-02-01")
        mock_supabase.query.lt.assert_called_with("work_date", "2024-03-01")

    @pytest.mark.asyncio
    async def test_settlement_marks_paid_and_invalidates(self, mock_supabase, cache):
        await prime(cache, "karigar_work:all:all", "karigar_work:k-1:2024-02", DASHBOARD_STATS, KARIGARS_LIST)
        service = KarigarService(mock_supabase, cache)

        await service.settle_karigar_payments(["w-1", "w-2"], "2024-11-05", "UPI")

        update = mock_supabase.query.update.call_args[0][0]
        assert update == {"payment_status": "PAID", "payment_date": "2024-11-05", "payment_mode": "UPI"}
        mock_supabase.query.in_.assert_called_with("id", ["w-1", "w-2"])
        assert not await is_cached(cache, "karigar_work:all:all")
        assert not await is_cached(cache, "karigar_work:k-1:2024-02")
        assert not await is_cached(cache, DASHBOARD_STATS)
        assert await is_cached(cache, KARIGARS_LIST)


class TestProductService:
    @pytest.mark.asyncio
    async def test_soft_delete(self, mock_supabase, cache):
        await prime(cache, PRODUCTS_LIST, "stock_finished_goods")
        service = ProductService(mock_supabase, cache)

        await service.delete_product("p-1")

        mock_supabase.query.update.assert_called_with({"is_active": False})
        mock_supabase.query.eq.assert_called_with("id", "p-1")
        assert not await is_cached(cache, PRODUCTS_LIST)
        assert not await is_cached(cache, "stock_finished_goods")

    @pytest.mark.asyncio
    async def test_empty_update_skips_database(self, mock_supabase, cache):
        await prime(cache, PRODUCTS_LIST)
        service = ProductService(mock_supabase, cache)

        await service.update_product("p-1", ProductUpdate())

        mock_supabase.table.assert_not_called()
        assert await is_cached(cache, PRODUCTS_LIST)

    @pytest.mark.asyncio
    async def test_add_product(self, mock_supabase, cache):
        mock_supabase.query.execute.return_value.data = [{"id": "p-9", "name": "Bichhiya"}]
        service = ProductService(mock_supabase, cache)
        row = await service.add_product(ProductCreate(name="Bichhiya", default_weight=12.5))
        assert row["id"] == "p-9"


class TestJobWorkService:
    @pytest.mark.asyncio
    async def test_update_invalidates_list(self, mock_supabase, cache):
        await prime(cache, JOB_WORK_ITEMS)
        service = JobWorkService(mock_supabase, cache)

        await service.update_job_work_item("j-1", JobWorkItemUpdate(rate=45))

        mock_supabase.query.update.assert_called_with({"rate": 45})
        assert not await is_cached(cache, JOB_WORK_ITEMS)


class TestExpenseService:
    @pytest.mark.asyncio
    async def test_create_expense_invalidates_list(self, mock_supabase, cache):
        await prime(cache, EXPENSES_LIST)
        service = ExpenseService(mock_supabase, cache)

        await service.create_expense(ExpenseCreate(date="2024-11-01", head="Karigar Payment - Suresh", amount=1200))

        assert not await is_cached(cache, EXPENSES_LIST)
