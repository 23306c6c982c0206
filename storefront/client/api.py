"""
Store Client

Async HTTP client for the catalog and order stores.

Usage:
    async with StoreClient("http://localhost:5000") as client:
        catalog = await client.fetch_restaurants()
        orders = await client.fetch_orders()

Every read failure (network, status, unparseable body) is raised as
``FetchFailure``; every submission failure as ``SubmitFailure``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from storefront.client.catalog import build_catalog
from storefront.client.errors import FetchFailure, SubmitFailure
from storefront.client.models import Catalog, PlacedOrder
from storefront.core.config import get_settings

logger = logging.getLogger(__name__)

RESTAURANTS_PATH = "/api/restaurants"
ORDERS_PATH = "/api/orders"


class StoreClient:
    """
    Client for the storefront backend.

    Attributes:
        base_url: Backend root URL
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings()
        self.base_url = base_url or settings.api_base_url
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=timeout if timeout is not None else settings.client_timeout_seconds,
        )

    async def __aenter__(self) -> StoreClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get_json(self, store: str, path: str) -> Any:
        try:
            response = await self._http.get(path)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise FetchFailure(store, str(e)) from e
        except ValueError as e:
            raise FetchFailure(store, f"invalid JSON: {e}") from e

    async def fetch_restaurants(self) -> Catalog:
        """
        Fetch and normalize the restaurant catalog.

        Raises:
            FetchFailure: On any network, status or shape error
        """
        records = await self._get_json("catalog", RESTAURANTS_PATH)
        try:
            catalog = build_catalog(records)
        except (KeyError, TypeError, AttributeError) as e:
            raise FetchFailure("catalog", f"malformed record: {e!r}") from e
        logger.info(f"✅ Restaurants loaded from backend: {len(catalog)}")
        return catalog

    async def fetch_orders(self) -> list[PlacedOrder]:
        """
        Fetch placed orders in store order.

        Raises:
            FetchFailure: On any network, status or shape error
        """
        records = await self._get_json("orders", ORDERS_PATH)
        if not isinstance(records, list):
            raise FetchFailure("orders", f"expected a list, got {type(records).__name__}")
        try:
            return [PlacedOrder.from_record(record) for record in records]
        except (TypeError, AttributeError) as e:
            raise FetchFailure("orders", f"malformed record: {e!r}") from e

    async def submit_order(self, payload: dict[str, Any]) -> Optional[str]:
        """
        Append an order to the order store.

        Returns:
            The new order's id when the store reports one

        Raises:
            SubmitFailure: On network error or non-success status
        """
        try:
            response = await self._http.post(ORDERS_PATH, json=payload)
        except httpx.HTTPError as e:
            raise SubmitFailure(str(e)) from e

        if not response.is_success:
            raise SubmitFailure(f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            return None
        return body.get("_id") if isinstance(body, dict) else None
