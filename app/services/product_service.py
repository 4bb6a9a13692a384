from abc import ABC, abstractmethod
from functools import lru_cache
from typing import List
from uuid import UUID

import httpx
import structlog

from app.core.config import settings
from app.core.result import Result
from app.dao.product_dao import ProductDAO, product_dao
from app.models.product import Product
from app.sao.product_sao import ProductSAO
from app.sao.response_mapper import map_downstream_response
from app.schemas.product_schemas import ProductCreateRequest

logger = structlog.get_logger()


class ProductService(ABC):
    """Product operations. Every operation returns a Result and never raises for a classified failure."""

    @abstractmethod
    async def get_all_products(self) -> Result[List[Product]]:
        pass

    @abstractmethod
    async def get_product_by_id(self, product_id: UUID) -> Result[Product]:
        pass

    @abstractmethod
    async def create_product(self, request: ProductCreateRequest) -> Result[Product]:
        pass


class HttpProductService(ProductService):
    """Forwards product operations to the downstream product API."""

    def __init__(self, sao: ProductSAO):
        self.sao = sao

    async def get_all_products(self) -> Result[List[Product]]:
        try:
            response = await self.sao.list_products()
        except httpx.RequestError as e:
            logger.error("Failed to call downstream API for get_all_products", error=str(e), exc_info=True)
            return Result.failure("Failed to retrieve products from downstream service", 500)
        return map_downstream_response(response, List[Product], "Products")

    async def get_product_by_id(self, product_id: UUID) -> Result[Product]:
        try:
            response = await self.sao.get_product(product_id)
        except httpx.RequestError as e:
            logger.error(
                "Failed to call downstream API for get_product_by_id",
                product_id=str(product_id),
                error=str(e),
                exc_info=True,
            )
            return Result.failure("Failed to retrieve product from downstream service", 500)
        return map_downstream_response(response, Product)

    async def create_product(self, request: ProductCreateRequest) -> Result[Product]:
        try:
            response = await self.sao.create_product(request.model_dump(mode="json"))
        except httpx.RequestError as e:
            logger.error("Failed to call downstream API for create_product", error=str(e), exc_info=True)
            return Result.failure("Failed to create product in downstream service", 500)
        return map_downstream_response(response, Product)


class InMemoryProductService(ProductService):
    """Keeps products in a process-local store."""

    def __init__(self, dao: ProductDAO):
        self.product_dao = dao

    async def get_all_products(self) -> Result[List[Product]]:
        products = await self.product_dao.get_multi()
        logger.info("Retrieved products", count=len(products))
        return Result.coerce(products)

    async def get_product_by_id(self, product_id: UUID) -> Result[Product]:
        product = await self.product_dao.get_by_id(product_id)
        if product is None:
            logger.warning("Product not found", product_id=str(product_id))
            return Result.not_found("Product")
        return Result.coerce(product)

    async def create_product(self, request: ProductCreateRequest) -> Result[Product]:
        product = await self.product_dao.create(obj_in=request.model_dump())
        logger.info("Product created successfully", product_id=str(product.id))
        return Result.coerce(product)


@lru_cache
def get_product_service() -> ProductService:
    """FastAPI dependency returning the configured product service."""
    if settings.product_store == "memory":
        return InMemoryProductService(product_dao)
    return HttpProductService(ProductSAO())
