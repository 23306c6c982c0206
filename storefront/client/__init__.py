"""
Storefront client.

Cart, catalog view, checkout and order view logic, the async client for
the catalog and order stores, and the controller that ties them to a page.
"""

from storefront.client.api import StoreClient
from storefront.client.app import Storefront
from storefront.client.cart import Cart
from storefront.client.document import StorefrontDocument, View
from storefront.client.errors import EmptyCartError, FetchFailure, LookupMiss, SubmitFailure
from storefront.client.filters import FilterState, TypeFilter, TypeFilterKind
from storefront.client.models import Catalog, CartLine, DeliveryDetails, MenuItem, Restaurant

__all__ = [
    "StoreClient",
    "Storefront",
    "Cart",
    "StorefrontDocument",
    "View",
    "EmptyCartError",
    "FetchFailure",
    "LookupMiss",
    "SubmitFailure",
    "FilterState",
    "TypeFilter",
    "TypeFilterKind",
    "Catalog",
    "CartLine",
    "DeliveryDetails",
    "MenuItem",
    "Restaurant",
]
