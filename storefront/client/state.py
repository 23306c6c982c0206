"""Application state shared by the storefront command handlers."""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.client.cart import Cart
from storefront.client.filters import FilterState
from storefront.client.models import Catalog, DeliveryDetails, PlacedOrder


@dataclass
class AppState:
    catalog: Catalog = field(default_factory=Catalog)
    cart: Cart = field(default_factory=Cart)
    orders: list[PlacedOrder] = field(default_factory=list)
    filters: FilterState = field(default_factory=FilterState)
    form: DeliveryDetails = field(default_factory=DeliveryDetails)
