"""
Catalog normalization.

Turns raw catalog-store records into client ``Restaurant`` objects, filling
display defaults and deriving catalog-wide menu item ids, and provides the
built-in demo catalog used when the store cannot be reached.
"""

from __future__ import annotations

from typing import Any, Iterable

from storefront.client.models import Catalog, MenuItem, Restaurant
from storefront.core.config import get_settings

DEFAULT_CATEGORY = "Main Course"
DEFAULT_ITEM_RATING = 4.5

DEMO_RECORDS: list[dict[str, Any]] = [
    {
        "_id": "r1", "name": "Reddys Kitchen", "cuisine": "Indian", "rating": 4.6, "time": "30 mins",
        "image": "https://images.pexels.com/photos/11170284/pexels-photo-11170284.jpeg",
        "menu": [{"name": "Chicken Biryani", "price": 240, "veg": False, "category": "Biryani"}],
    },
    {
        "_id": "r2", "name": "Shoel Biriyani", "cuisine": "Arabian", "rating": 4.5, "time": "32 mins",
        "image": "https://images.pexels.com/photos/11232406/pexels-photo-11232406.jpeg",
        "menu": [{"name": "Mandi Special", "price": 420, "veg": False, "category": "Mandi"}],
    },
]


def menu_item_id(restaurant_id: str, index: int) -> str:
    """Catalog-wide id of the ``index``-th item on a restaurant's menu."""
    return f"{restaurant_id}-m{index}"


def normalize_restaurant(record: dict[str, Any]) -> Restaurant:
    """
    Build a ``Restaurant`` from a catalog-store record.

    Raises:
        KeyError: If a required field (``_id``, ``name``, ``price`` ...) is absent
        TypeError: If ``menu`` is not a list of mappings
    """
    settings = get_settings()
    restaurant_id = str(record["_id"])
    menu = tuple(
        MenuItem(
            id=menu_item_id(restaurant_id, index),
            name=item["name"],
            desc=item.get("desc") or "",
            price=item["price"],
            veg=bool(item.get("veg") or False),
            rating=item.get("rating") or DEFAULT_ITEM_RATING,
            category=item.get("category") or DEFAULT_CATEGORY,
        )
        for index, item in enumerate(record["menu"])
    )
    return Restaurant(
        id=restaurant_id,
        name=record["name"],
        cuisine=record["cuisine"],
        rating=record["rating"],
        time=record["time"],
        image=record.get("image") or settings.placeholder_image_url,
        emoji=record.get("emoji") or settings.default_emoji,
        menu=menu,
    )


def build_catalog(records: Iterable[dict[str, Any]]) -> Catalog:
    return Catalog(normalize_restaurant(record) for record in records)


def demo_catalog() -> Catalog:
    """Small fixed catalog shown when the catalog store is unavailable."""
    return build_catalog(DEMO_RECORDS)
