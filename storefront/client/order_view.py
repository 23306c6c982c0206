"""
Order View

Shapes placed orders for display, keeping the order the store returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from storefront.client.models import Number, PlacedOrder

SHORT_ID_LENGTH = 6
MISSING_ID = "N/A"
UNKNOWN_TIME = "Unknown time"
NO_ITEMS = "No items"


@dataclass(frozen=True)
class OrderSummary:
    short_id: str
    placed_at: str
    total: Number
    customer_name: str
    phone: str
    item_lines: tuple[str, ...]


def short_order_id(order_id: Optional[str]) -> str:
    """Last six characters of the id, or a placeholder."""
    if not order_id:
        return MISSING_ID
    return order_id[-SHORT_ID_LENGTH:]


def format_timestamp(value: Optional[str], fmt: str) -> str:
    """Render an ISO-8601 timestamp, tolerating a trailing ``Z``."""
    if not value:
        return UNKNOWN_TIME
    try:
        moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return UNKNOWN_TIME
    return moment.strftime(fmt)


def item_line(qty: int, name: str, restaurant_name: str) -> str:
    return f"{qty} × {name} ({restaurant_name})"


def summarize(order: PlacedOrder, timestamp_format: str) -> OrderSummary:
    lines = tuple(item_line(i.qty, i.name, i.restaurant_name) for i in order.items)
    return OrderSummary(
        short_id=short_order_id(order.id),
        placed_at=format_timestamp(order.created_at, timestamp_format),
        total=order.total,
        customer_name=order.customer_name,
        phone=order.phone,
        item_lines=lines or (NO_ITEMS,),
    )


def summarize_orders(orders: Iterable[PlacedOrder], timestamp_format: str) -> list[OrderSummary]:
    return [summarize(order, timestamp_format) for order in orders]
