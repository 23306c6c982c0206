"""
Storefront Controller

Owns the application state and exposes one command handler per user
action. A presentation layer (browser bridge, script, test) calls these
handlers; they update state, re-render the affected regions of the
``StorefrontDocument`` and navigate between views.

Usage:
    async with StoreClient() as client:
        shop = Storefront(client)
        await shop.start()
        shop.add_to_cart("r1", "r1-m0")
        shop.state.form = DeliveryDetails(name="Ravi", phone="9876543210", address="MG Road")
        await shop.submit_checkout()
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from storefront.client.api import StoreClient
from storefront.client.cart import Cart
from storefront.client.catalog import demo_catalog
from storefront.client.catalog_view import HOME_ROWS, home_row_dishes, restaurant_cards
from storefront.client.checkout import (
    EMPTY_CART_MESSAGE,
    ORDER_FAILED_MESSAGE,
    ORDER_PLACED_MESSAGE,
    build_order_payload,
)
from storefront.client.document import (
    CART,
    ORDERS,
    RESTAURANT_LIST,
    StorefrontDocument,
    View,
    home_row_region,
)
from storefront.client.errors import EmptyCartError, FetchFailure, SubmitFailure
from storefront.client.filters import ALL, TypeFilter
from storefront.client.models import DeliveryDetails
from storefront.client.order_view import summarize_orders
from storefront.client.render import StorefrontRenderer
from storefront.client.state import AppState
from storefront.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class Storefront:
    """Command handlers for the storefront UI."""

    def __init__(
        self,
        client: StoreClient,
        document: Optional[StorefrontDocument] = None,
        renderer: Optional[StorefrontRenderer] = None,
        state: Optional[AppState] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.client = client
        self.document = document or StorefrontDocument()
        self.renderer = renderer or StorefrontRenderer(self.settings.currency_symbol)
        self.state = state or AppState(cart=Cart(delivery_fee=self.settings.delivery_fee))

    # =========================================================================
    # LOADING
    # =========================================================================

    async def start(self) -> None:
        """Initial page load: catalog, cart, orders, then home rows."""
        await self.load_catalog()
        self.render_cart()
        await self.load_orders()
        self.render_home()

    async def load_catalog(self) -> None:
        try:
            catalog = await self.client.fetch_restaurants()
        except FetchFailure as e:
            logger.error(f"Failed to load restaurants: {e}")
            catalog = demo_catalog()
        self.state.catalog = catalog
        self.render_restaurants()

    async def load_orders(self) -> None:
        try:
            orders = await self.client.fetch_orders()
        except FetchFailure as e:
            logger.error(f"Failed to load orders: {e}")
            orders = []
        self.state.orders = orders
        self.render_orders()

    # =========================================================================
    # NAVIGATION & FILTERS
    # =========================================================================

    def navigate(self, view: View) -> None:
        self.document.show_view(view)

    def set_cuisine(self, cuisine: Optional[str]) -> None:
        self.state.filters.cuisine = cuisine or ALL
        self._sync_filter_buttons()
        self.render_restaurants()

    def set_type(self, label: Optional[str]) -> None:
        self.state.filters.type_filter = TypeFilter.from_label(label)
        self._sync_filter_buttons()
        self.render_restaurants()

    def jump_to_type(self, label: Optional[str]) -> None:
        """Category shortcut: apply the type (if any) and open the listing."""
        if label:
            self.state.filters.type_filter = TypeFilter.from_label(label)
            self._sync_filter_buttons()
        self.navigate(View.RESTAURANTS)
        self.render_restaurants()

    def search(self, term: str) -> None:
        self.state.filters.search_term = (term or "").strip()
        self.navigate(View.RESTAURANTS)
        self.render_restaurants()

    def _sync_filter_buttons(self) -> None:
        filters = self.state.filters
        self.document.highlight_filters(filters.cuisine, filters.type_filter.label)

    # =========================================================================
    # CART
    # =========================================================================

    def add_to_cart(self, restaurant_id: str, item_id: str) -> bool:
        """Add an item and open the cart. Returns False for unknown ids."""
        line = self.state.cart.add(self.state.catalog, restaurant_id, item_id)
        if line is None:
            return False
        self.render_cart()
        self.navigate(View.CART)
        return True

    def increment(self, restaurant_id: str, item_id: str) -> None:
        self.state.cart.increment(restaurant_id, item_id)
        self.render_cart()

    def decrement(self, restaurant_id: str, item_id: str) -> None:
        self.state.cart.decrement(restaurant_id, item_id)
        self.render_cart()

    def remove(self, restaurant_id: str, item_id: str) -> None:
        self.state.cart.remove(restaurant_id, item_id)
        self.render_cart()

    # =========================================================================
    # CHECKOUT
    # =========================================================================

    async def submit_checkout(self, details: Optional[DeliveryDetails] = None) -> bool:
        """
        Place an order for the current cart.

        On success the cart and form are cleared, orders are re-fetched and
        the orders view is opened. On failure nothing is changed and the
        user may resubmit.

        Returns:
            bool: Whether the order was placed
        """
        if details is not None:
            self.state.form = dataclasses.replace(details)

        try:
            payload = build_order_payload(self.state.cart, self.state.form)
        except EmptyCartError:
            self.document.alert(EMPTY_CART_MESSAGE)
            return False

        try:
            order_id = await self.client.submit_order(payload)
        except SubmitFailure as e:
            logger.error(f"Order error: {e}")
            self.document.alert(ORDER_FAILED_MESSAGE)
            return False

        logger.info(f"Order placed: {order_id or 'id not reported'} (total {payload['total']})")
        self.state.cart.clear()
        self.state.form.reset()
        self.render_cart()
        await self.load_orders()
        self.document.alert(ORDER_PLACED_MESSAGE)
        self.navigate(View.ORDERS)
        return True

    # =========================================================================
    # RENDERING
    # =========================================================================

    def render_restaurants(self) -> None:
        cards = restaurant_cards(self.state.catalog, self.state.filters)
        self.document.update(RESTAURANT_LIST, self.renderer.restaurant_list(cards))

    def render_cart(self) -> None:
        self.document.update(CART, self.renderer.cart(self.state.cart))

    def render_orders(self) -> None:
        summaries = summarize_orders(self.state.orders, self.settings.order_timestamp_format)
        self.document.update(ORDERS, self.renderer.orders(summaries))

    def render_home(self) -> None:
        if not len(self.state.catalog):
            return
        for row in HOME_ROWS:
            dishes = home_row_dishes(self.state.catalog, row)
            self.document.update(home_row_region(row.key), self.renderer.dish_row(dishes))
