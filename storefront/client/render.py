"""
HTML rendering for the storefront views.

Each view is a Jinja2 template under ``storefront/templates``; the renderer
returns the fragment the page swaps into the matching region. Autoescaping
is on, so catalog and customer text never reaches the page as markup.
"""

from __future__ import annotations

from functools import partial
from typing import Iterable, Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from storefront.client.cart import Cart
from storefront.client.catalog_view import RestaurantCard
from storefront.client.models import Dish, Number
from storefront.client.order_view import OrderSummary
from storefront.core.config import get_settings


def format_price(value: Number, symbol: str = "₹") -> str:
    """``₹240`` for whole amounts, ``₹240.50`` otherwise."""
    if isinstance(value, float):
        value = int(value) if value.is_integer() else f"{value:.2f}"
    return f"{symbol}{value}"


class StorefrontRenderer:
    """Renders storefront view fragments."""

    def __init__(self, currency_symbol: Optional[str] = None):
        symbol = currency_symbol or get_settings().currency_symbol
        self.env = Environment(
            loader=PackageLoader("storefront", "templates"),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["price"] = partial(format_price, symbol=symbol)

    def _render(self, template: str, **context) -> str:
        return self.env.get_template(template).render(**context).strip()

    def restaurant_list(self, cards: Iterable[RestaurantCard]) -> str:
        return self._render("restaurant_list.html", cards=list(cards))

    def cart(self, cart: Cart) -> str:
        return self._render("cart.html", lines=cart.lines, totals=cart.totals())

    def orders(self, orders: Iterable[OrderSummary]) -> str:
        return self._render("orders.html", orders=list(orders))

    def dish_row(self, dishes: Iterable[Dish]) -> str:
        return self._render("dish_row.html", dishes=list(dishes))
