"""Domain models for the storefront client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Union

from storefront.client.errors import LookupMiss

Number = Union[int, float]


@dataclass(frozen=True)
class MenuItem:
    """A dish on a restaurant's menu. ``id`` is unique across the catalog."""

    id: str
    name: str
    price: Number
    desc: str = ""
    veg: bool = False
    rating: float = 4.5
    category: str = "Main Course"

    @property
    def tags(self) -> str:
        return "Veg" if self.veg else "Non-Veg"


@dataclass(frozen=True)
class Restaurant:
    """A restaurant and its menu, as fetched from the catalog store."""

    id: str
    name: str
    cuisine: str
    rating: float
    time: str
    image: str
    emoji: str
    menu: tuple[MenuItem, ...] = ()

    def find_item(self, item_id: str) -> Optional[MenuItem]:
        return next((item for item in self.menu if item.id == item_id), None)


@dataclass(frozen=True)
class Dish:
    """A menu item annotated with its restaurant, for cross-restaurant rows."""

    item: MenuItem
    restaurant_id: str
    restaurant_name: str
    rating: float

    @property
    def id(self) -> str:
        return self.item.id

    @property
    def name(self) -> str:
        return self.item.name

    @property
    def price(self) -> Number:
        return self.item.price

    @property
    def category(self) -> str:
        return self.item.category

    @property
    def tags(self) -> str:
        return self.item.tags


class Catalog:
    """Read-only restaurant catalog with id lookups."""

    def __init__(self, restaurants: Iterable[Restaurant] = ()):
        self._restaurants = tuple(restaurants)
        self._by_id = {r.id: r for r in self._restaurants}

    @property
    def restaurants(self) -> tuple[Restaurant, ...]:
        return self._restaurants

    def __iter__(self) -> Iterator[Restaurant]:
        return iter(self._restaurants)

    def __len__(self) -> int:
        return len(self._restaurants)

    def restaurant(self, restaurant_id: str) -> Optional[Restaurant]:
        return self._by_id.get(restaurant_id)

    def lookup(self, restaurant_id: str, item_id: str) -> tuple[Restaurant, MenuItem]:
        """
        Resolve a (restaurant, item) id pair.

        Raises:
            LookupMiss: If either id is unknown
        """
        restaurant = self._by_id.get(restaurant_id)
        item = restaurant.find_item(item_id) if restaurant else None
        if item is None:
            raise LookupMiss((restaurant_id, item_id))
        return restaurant, item


@dataclass
class CartLine:
    """One cart row. Price and names are snapshots taken when first added."""

    restaurant_id: str
    restaurant_name: str
    item_id: str
    name: str
    price: Number
    qty: int = 1

    @property
    def key(self) -> tuple[str, str]:
        return (self.restaurant_id, self.item_id)

    @property
    def line_total(self) -> Number:
        return self.qty * self.price


@dataclass(frozen=True)
class CartTotals:
    subtotal: Number
    delivery: Number
    total: Number


@dataclass
class DeliveryDetails:
    """The checkout form."""

    name: str = ""
    phone: str = ""
    address: str = ""
    payment: str = "Cash on Delivery"

    def reset(self) -> None:
        defaults = DeliveryDetails()
        self.name = defaults.name
        self.phone = defaults.phone
        self.address = defaults.address
        self.payment = defaults.payment


@dataclass(frozen=True)
class PlacedOrderItem:
    restaurant_name: str
    name: str
    qty: int
    price: Number


@dataclass(frozen=True)
class PlacedOrder:
    """An order as returned by the order store. Every field may be absent."""

    id: Optional[str] = None
    customer_name: str = ""
    phone: str = ""
    address: str = ""
    payment: str = ""
    total: Number = 0
    items: tuple[PlacedOrderItem, ...] = field(default_factory=tuple)
    created_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict) -> PlacedOrder:
        """Build from an order-store record (camelCase keys, ``_id``)."""
        items = tuple(
            PlacedOrderItem(
                restaurant_name=item.get("restaurantName", ""),
                name=item.get("name", ""),
                qty=item.get("qty", 0),
                price=item.get("price", 0),
            )
            for item in record.get("items") or ()
        )
        order_id = record.get("_id", record.get("id"))
        created_at = record.get("createdAt") or record.get("placedAt")
        return cls(
            id=str(order_id) if order_id is not None else None,
            customer_name=record.get("customerName", ""),
            phone=record.get("phone", ""),
            address=record.get("address", ""),
            payment=record.get("payment", ""),
            total=record.get("total", 0),
            items=items,
            created_at=str(created_at) if created_at else None,
        )
