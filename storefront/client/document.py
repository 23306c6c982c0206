"""
Headless page model.

``StorefrontDocument`` is what the storefront controller writes into: named
regions holding rendered HTML, the active view, the highlighted filter
buttons, and the acknowledgments shown to the user. A browser bridge or a
test reads the same state back out.
"""

from __future__ import annotations

import enum
import logging

logger = logging.getLogger(__name__)


class View(str, enum.Enum):
    HOME = "home"
    RESTAURANTS = "restaurants"
    CART = "cart"
    ORDERS = "orders"


RESTAURANT_LIST = "restaurant-list"
CART = "cart"
ORDERS = "orders-list"


def home_row_region(key: str) -> str:
    return f"home-{key}-list"


class StorefrontDocument:
    """In-memory page state."""

    def __init__(self):
        self.regions: dict[str, str] = {}
        self.active_view = View.HOME
        self.active_cuisine = "all"
        self.active_type = "all"
        self.alerts: list[str] = []

    def update(self, region: str, html: str) -> None:
        self.regions[region] = html

    def region(self, region: str) -> str:
        return self.regions.get(region, "")

    def show_view(self, view: View) -> None:
        self.active_view = View(view)

    def highlight_filters(self, cuisine: str, type_label: str) -> None:
        self.active_cuisine = cuisine
        self.active_type = type_label

    def alert(self, message: str) -> None:
        """Surface a blocking acknowledgment to the user."""
        logger.info(f"Alert: {message}")
        self.alerts.append(message)

    @property
    def last_alert(self):
        return self.alerts[-1] if self.alerts else None
