"""Tests for GST, P&L and dashboard reporting."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from app.core.cache import DASHBOARD_STATS
from app.services.accounting_service import build_pl_report
from app.services.dashboard_service import DashboardService, compute_dashboard_stats
from app.services.gst_service import GSTService, calculate_gst_summary, month_bounds
from app.services.inventory_service import InventoryService
from app.services.order_service import OrderService
from app.services.rate_service import RateService
from conftest import is_cached


# ---------------------------------------------------------------------------
# GST
# ---------------------------------------------------------------------------

class TestMonthBounds:
    def test_regular_month(self):
        assert month_bounds("2024-02") == ("2024-02-01", "2024-03-01")

    def test_december_rolls_year(self):
        assert month_bounds("2024-12") == ("2024-12-01", "2025-01-01")

    def test_invalid_month(self):
        with pytest.raises(ValueError):
            month_bounds("2024-13")
        with pytest.raises(ValueError):
            month_bounds("Nov-2024")


class TestGSTSummary:
    def test_orders_grouped_by_rate(self):
        orders = [
            {"gst_rate": 3, "subtotal": 1000, "gst_amount": 30, "total_amount": 1030},
            {"gst_rate": 5, "subtotal": 200, "gst_amount": 10, "total_amount": 210},
            {"gst_rate": 3, "subtotal": 500, "gst_amount": 15, "total_amount": 515},
        ]
        summary = calculate_gst_summary(orders, "output")

        assert [row.rate for row in summary] == [3, 5]
        assert summary[0].taxable_value == 1500
        assert summary[0].gst_amount == 45
        assert summary[0].total_amount == 1545
        assert summary[0].type == "output"

    def test_expense_total_is_amount_plus_gst(self):
        expenses = [{"gst_rate": 18, "amount": 1000, "gst_amount": 180}]
        summary = calculate_gst_summary(expenses, "input")
        assert summary[0].total_amount == 1180

    def test_missing_rate_groups_under_zero(self):
        summary = calculate_gst_summary([{"amount": 50}], "input")
        assert summary[0].rate == 0
        assert summary[0].gst_amount == 0

    @pytest.mark.asyncio
    async def test_gst_orders_filtered_by_month(self, mock_supabase):
        service = GSTService(mock_supabase)
        await service.get_gst_orders("2024-12")

        mock_supabase.query.gte.assert_called_with("order_date", "2024-12-01")
        mock_supabase.query.lt.assert_called_with("order_date", "2025-01-01")

    @pytest.mark.asyncio
    async def test_report_net_payable(self, mock_supabase):
        mock_supabase.query.execute.side_effect = [
            MagicMock(data=[{"gst_rate": 3, "subtotal": 1000, "gst_amount": 30, "total_amount": 1030}]),
            MagicMock(data=[{"gst_rate": 18, "amount": 100, "gst_amount": 18}]),
        ]
        report = await GSTService(mock_supabase).get_gst_report()
        assert report["output_tax"] == 30
        assert report["input_tax_credit"] == 18
        assert report["net_payable"] == 12


# ---------------------------------------------------------------------------
# P&L
# ---------------------------------------------------------------------------

class TestPLReport:
    def test_income_and_expense_split(self):
        income = [
            {"ledgers": {"name": "Job Work Income"}, "credit": 5000},
            {"ledgers": {"name": "Product Sales Income"}, "credit": "12000"},
            {"ledgers": {"name": "Job Work Income"}, "credit": 1000},
        ]
        expenses = [
            {"head": "Karigar Payment - Suresh", "amount": 2500},
            {"head": "Rent", "amount": 4000},
            {"head": "Electricity", "amount": None},
        ]
        report = build_pl_report(income, expenses)

        assert report.job_work_income == 6000
        assert report.product_sales_income == 12000
        assert report.karigar_expenses == 2500
        assert report.general_expenses == 4000
        assert report.total_expenses == 6500
        assert report.net_profit == 11500


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

class TestDashboardStats:
    def test_monthly_and_pending_figures(self):
        orders = [
            {"order_date": "2024-11-03", "status": "Pending", "total_amount": 1030, "gst_amount": 30,
             "items": [{"quantity": 4}, {"quantity": 1}]},
            {"order_date": "2024-11-20", "status": "Completed", "total_amount": 500, "gst_amount": 15,
             "items": [{"quantity": 2}]},
            {"order_date": "2024-10-30", "status": "In Progress", "total_amount": 200, "gst_amount": 0,
             "items": [{"quantity": 9}]},
        ]
        stats = compute_dashboard_stats(orders, 1500, 500, {"rate_10g": 950}, date(2024, 11, 25))

        assert stats.total_silver_stock_kg == 2
        assert stats.pending_orders == 2
        assert stats.pending_value == 1230
        assert stats.monthly_sales == 1530
        assert stats.gst_payable == 45
        assert stats.products_made == 7
        assert stats.latest_rate == {"rate_10g": 950}

    def test_bad_dates_are_skipped(self):
        stats = compute_dashboard_stats([{"order_date": "soon", "status": "Completed"}], 0, 0, None, date(2024, 11, 1))
        assert stats.monthly_sales == 0

    @pytest.mark.asyncio
    async def test_dashboard_is_cached_and_shares_stock_query(self, mock_supabase, cache):
        service = DashboardService(
            OrderService(mock_supabase, cache),
            InventoryService(mock_supabase, cache),
            RateService(mock_supabase, cache),
            cache,
        )

        first = await service.get_dashboard_stats()
        # silver_rates, stock_transactions (once for both derived reads), orders
        assert mock_supabase.query.execute.call_count == 3

        second = await service.get_dashboard_stats()
        assert second is first
        assert mock_supabase.query.execute.call_count == 3
        assert await is_cached(cache, DASHBOARD_STATS)
