from fastapi import APIRouter, Depends

from app.models.schemas import OrderCreate, OrderTotals
from app.routers.deps import get_order_service, get_product_service
from app.services.order_service import OrderService, preview_totals
from app.services.product_service import ProductService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("")
async def list_orders(orders: OrderService = Depends(get_order_service)):
    return await orders.get_orders()


@router.post("/preview", response_model=OrderTotals)
async def preview_order(order: OrderCreate):
    return preview_totals(order)


@router.post("", status_code=201)
async def create_order(
    order: OrderCreate,
    orders: OrderService = Depends(get_order_service),
    products: ProductService = Depends(get_product_service),
):
    catalogue = await products.get_products() if order.material_type == "OWN" else None
    result = await orders.create_order(order, catalogue)
    return {"status": "ok", "order": result}
