import logging

from supabase import Client

from app.core.cache import PRODUCTS_LIST, STOCK_PREFIX, CacheStore
from app.core.database import execute
from app.models.schemas import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """Finished-goods catalogue. Deletes are soft (is_active = false)."""

    def __init__(self, db: Client, cache: CacheStore):
        self.db = db
        self.cache = cache

    def _invalidate(self):
        # The finished-goods stock view lists the same rows.
        self.cache.invalidate(PRODUCTS_LIST)
        self.cache.invalidate_pattern(STOCK_PREFIX)

    async def get_products(self) -> list[dict]:
        async def _fetch():
            return await execute(self.db.table("products").select("*").eq("is_active", True).order("name"))

        return await self.cache.get_or_fetch(PRODUCTS_LIST, _fetch)

    async def add_product(self, product: ProductCreate) -> dict | None:
        rows = await execute(self.db.table("products").insert([product.model_dump()]))
        self._invalidate()
        logger.info(f"Product added: {product.name}")
        return rows[0] if rows else None

    async def update_product(self, product_id: str, updates: ProductUpdate) -> None:
        payload = updates.model_dump(exclude_none=True)
        if not payload:
            return
        await execute(self.db.table("products").update(payload).eq("id", product_id))
        self._invalidate()

    async def delete_product(self, product_id: str) -> None:
        await execute(self.db.table("products").update({"is_active": False}).eq("id", product_id))
        self._invalidate()
        logger.info(f"Product deactivated: {product_id}")
