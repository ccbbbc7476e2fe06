import logging

from supabase import Client

from app.core.cache import DASHBOARD_STATS, KARIGAR_WORK_PREFIX, ORDERS_LIST, PRODUCTS_LIST, STOCK_PREFIX, CacheStore
from app.core.database import execute
from app.models.schemas import OrderCreate, OrderTotals

logger = logging.getLogger(__name__)

# Job work on the customer's silver is taxed at 5%, sale of our own silver at 3%.
GST_RATES = {"CLIENT": 5.0, "OWN": 3.0}

_KARIGAR_FIELDS = ("karigar_id", "karigar_rate", "karigar_quantity")


class InsufficientStockError(ValueError):
    def __init__(self, product: dict, requested: float):
        self.product = product
        self.requested = requested
        available = float(product.get("current_stock") or 0)
        super().__init__(f'Insufficient stock for "{product.get("name")}". Available: {available:g}, requested: {requested:g}')


def preview_totals(order: OrderCreate) -> OrderTotals:
    """Totals shown before submitting. The RPC computes the stored figures."""
    subtotal = sum(item.quantity * item.rate for item in order.items)
    gst_rate = GST_RATES[order.material_type]
    gst_amount = subtotal * gst_rate / 100 if order.gst_applies else 0.0
    return OrderTotals(
        subtotal=round(subtotal, 2),
        gst_rate=gst_rate,
        gst_amount=round(gst_amount, 2),
        total_amount=round(subtotal + gst_amount, 2),
    )


def check_stock(order: OrderCreate, products: list[dict]) -> None:
    """Reject OWN-material orders that ask for more pieces than are in stock."""
    if order.material_type != "OWN":
        return
    by_id = {p["id"]: p for p in products}
    for item in order.items:
        product = by_id.get(item.product_id) if item.product_id else None
        if product and item.quantity > float(product.get("current_stock") or 0):
            raise InsufficientStockError(product, item.quantity)


def _rpc_items(order: OrderCreate) -> list[dict]:
    items = []
    for item in order.items:
        data = item.model_dump(exclude_none=True)
        if not item.has_karigar:
            for field in _KARIGAR_FIELDS:
                data.pop(field, None)
        items.append(data)
    return items


class OrderService:
    def __init__(self, db: Client, cache: CacheStore):
        self.db = db
        self.cache = cache

    async def get_orders(self) -> list[dict]:
        async def _fetch():
            query = (
                self.db.table("orders")
                .select("*, items:order_items(*)")
                .order("created_at", desc=True)
            )
            return await execute(query)

        return await self.cache.get_or_fetch(ORDERS_LIST, _fetch)

    async def create_order(self, order: OrderCreate, products: list[dict] | None = None):
        """Create the order and its items atomically through the database RPC."""
        if products:
            check_stock(order, products)

        params = {
            "p_customer_name": order.customer_name,
            "p_order_date": order.order_date,
            "p_material_type": order.material_type,
            "p_items": _rpc_items(order),
            "p_gst_enabled": order.gst_applies,
        }
        try:
            result = await execute(self.db.rpc("create_order_atomic", params))
        except Exception as e:
            logger.error(f"create_order_atomic failed for {order.customer_name}: {e}")
            raise

        self.cache.invalidate(ORDERS_LIST)
        self.cache.invalidate(DASHBOARD_STATS)
        self.cache.invalidate(PRODUCTS_LIST)  # current_stock moves on OWN orders
        self.cache.invalidate_pattern(STOCK_PREFIX)
        self.cache.invalidate_pattern(KARIGAR_WORK_PREFIX)  # the RPC records karigar work rows
        logger.info(f"Order created for {order.customer_name} ({len(order.items)} items)")
        return result
