"""
                        Services Module

Backend services behind the HTTP API.

Services:
    - catalog_store: File-backed restaurant catalog
    - order_ledger: Lock-protected Excel ledger of placed orders
"""

from storefront.services.catalog_store import (
    CatalogStore,
    CatalogUnavailableError,
    get_catalog_store,
)
from storefront.services.order_ledger import OrderLedger

__all__ = ["CatalogStore", "CatalogUnavailableError", "get_catalog_store", "OrderLedger"]
