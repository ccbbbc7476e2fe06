from typing import Optional

from fastapi import APIRouter, Depends

from app.models.schemas import StockItemType, StockSummary, StockTransactionCreate
from app.routers.deps import get_inventory_service, get_rate_service
from app.services.inventory_service import InventoryService
from app.services.rate_service import RateService

router = APIRouter(prefix="/stock", tags=["stock"])


@router.get("/summary", response_model=StockSummary)
async def stock_summary(
    inventory: InventoryService = Depends(get_inventory_service),
    rates: RateService = Depends(get_rate_service),
):
    """Balances valued at the latest silver rate (per kg = 10g rate x 100)."""
    latest = await rates.get_latest_rate()
    rate_per_kg = float(latest["rate_10g"]) * 100 if latest else 0
    return await inventory.get_stock_summary(rate_per_kg)


@router.get("/transactions")
async def stock_transactions(
    item_type: Optional[StockItemType] = None,
    inventory: InventoryService = Depends(get_inventory_service),
):
    return await inventory.get_stock_transactions(item_type)


@router.post("/transactions", status_code=201)
async def add_stock_transaction(
    transaction: StockTransactionCreate,
    inventory: InventoryService = Depends(get_inventory_service),
):
    return await inventory.add_stock_transaction(transaction)


@router.get("/finished-goods")
async def finished_goods(inventory: InventoryService = Depends(get_inventory_service)):
    return await inventory.get_finished_goods_inventory()


@router.get("/metals")
async def metal_inventory(inventory: InventoryService = Depends(get_inventory_service)):
    return await inventory.get_metal_inventory()
