"""
Cart

Ordered collection of the lines a user is assembling. Lines are keyed by
(restaurant id, item id): adding an item already in the cart bumps its
quantity, and a line whose quantity reaches zero is dropped.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from storefront.client.errors import LookupMiss
from storefront.client.models import Catalog, CartLine, CartTotals, Number

logger = logging.getLogger(__name__)

DELIVERY_FEE = 40


class Cart:
    """
    Client-side shopping cart.

    Attributes:
        delivery_fee: Flat fee charged whenever the subtotal is positive
    """

    def __init__(self, delivery_fee: Number = DELIVERY_FEE):
        self.delivery_fee = delivery_fee
        self._lines: list[CartLine] = []

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def find(self, restaurant_id: str, item_id: str) -> Optional[CartLine]:
        return next(
            (line for line in self._lines if line.key == (restaurant_id, item_id)),
            None,
        )

    def add(self, catalog: Catalog, restaurant_id: str, item_id: str) -> Optional[CartLine]:
        """
        Add one unit of a catalog item.

        Unknown ids are ignored. Returns the affected line, or None when
        nothing was added.
        """
        try:
            restaurant, item = catalog.lookup(restaurant_id, item_id)
        except LookupMiss:
            logger.debug(f"Ignoring add for unknown item {restaurant_id}/{item_id}")
            return None

        line = self.find(restaurant_id, item_id)
        if line is not None:
            line.qty += 1
            return line

        line = CartLine(
            restaurant_id=restaurant.id,
            restaurant_name=restaurant.name,
            item_id=item.id,
            name=item.name,
            price=item.price,
        )
        self._lines.append(line)
        return line

    def increment(self, restaurant_id: str, item_id: str) -> None:
        line = self.find(restaurant_id, item_id)
        if line is not None:
            line.qty += 1

    def decrement(self, restaurant_id: str, item_id: str) -> None:
        line = self.find(restaurant_id, item_id)
        if line is None:
            return
        line.qty -= 1
        if line.qty <= 0:
            self.remove(restaurant_id, item_id)

    def remove(self, restaurant_id: str, item_id: str) -> None:
        self._lines = [line for line in self._lines if line.key != (restaurant_id, item_id)]

    def clear(self) -> None:
        self._lines = []

    def subtotal(self) -> Number:
        return sum(line.line_total for line in self._lines)

    def totals(self) -> CartTotals:
        subtotal = self.subtotal()
        delivery = self.delivery_fee if subtotal > 0 else 0
        return CartTotals(subtotal=subtotal, delivery=delivery, total=subtotal + delivery)
