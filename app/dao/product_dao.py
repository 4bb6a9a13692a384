import asyncio
from typing import List, Optional
from uuid import UUID, uuid4
from app.models.product import Product
import structlog

logger = structlog.get_logger()


class ProductDAO:
    """
    In-memory product store.

    The DAO instance owns its list; every read and write goes through one
    asyncio lock so concurrent requests never observe a half-applied change.
    """

    def __init__(self, initial: Optional[List[Product]] = None):
        self._products: List[Product] = list(initial or [])
        self._lock = asyncio.Lock()

    async def create(self, *, obj_in: dict) -> Product:
        async with self._lock:
            product = Product(**{**obj_in, "id": uuid4()})
            self._products.append(product)
        logger.info("Created Product", id=str(product.id))
        return product

    async def get_by_id(self, id: UUID) -> Optional[Product]:
        async with self._lock:
            return next((p for p in self._products if p.id == id), None)

    async def get_multi(self, *, skip: int = 0, limit: Optional[int] = None) -> List[Product]:
        end = None if limit is None else skip + limit
        async with self._lock:
            return self._products[skip:end]

    async def count(self) -> int:
        async with self._lock:
            return len(self._products)


product_dao = ProductDAO()
