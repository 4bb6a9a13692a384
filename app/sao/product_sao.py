from __future__ import annotations

import httpx
import structlog
from typing import Any, Dict, Optional
from uuid import UUID

from app.core.config import settings


class ProductSAO:
    """Service Access Object for the downstream product REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        request_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        base_url = base_url or settings.downstream_base_url
        if not base_url:
            raise ValueError("Downstream base URL is not configured")
        self._base_url = base_url.rstrip("/")
        self._timeout = request_timeout or settings.downstream_timeout_seconds
        self._transport = transport
        self._logger = structlog.get_logger().bind(component="ProductSAO")

    @property
    def base_url(self) -> str:
        return self._base_url

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        )

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        async with self._client() as client:
            response = await client.request(method, url, **kwargs)
            self._logger.debug(
                "Downstream responded",
                method=method,
                url=url,
                status_code=response.status_code,
            )
            return response

    async def list_products(self) -> httpx.Response:
        return await self._send("GET", "/api/products")

    async def get_product(self, product_id: UUID) -> httpx.Response:
        return await self._send("GET", f"/api/products/{product_id}")

    async def create_product(self, payload: Dict[str, Any]) -> httpx.Response:
        return await self._send("POST", "/api/products", json=payload)
