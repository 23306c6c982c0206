"""
Catalog View

Derives what the restaurant listing and the home page show from the raw
catalog and the current filter state. Pure functions over immutable
catalog data; nothing here touches the network or the document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from storefront.client.filters import FilterMode, FilterState, TypeFilter
from storefront.client.models import Dish, MenuItem, Restaurant

PREVIEW_SIZE = 3
HOME_ROW_SIZE = 6


@dataclass(frozen=True)
class RestaurantCard:
    """A listed restaurant together with the menu items it previews."""

    restaurant: Restaurant
    preview: tuple[MenuItem, ...]


@dataclass(frozen=True)
class HomeRow:
    """A home-page row of dishes drawn from every restaurant."""

    key: str
    title: str
    categories: frozenset[str]


HOME_ROWS: tuple[HomeRow, ...] = (
    HomeRow("biryani", "Biryani", frozenset({"Biryani"})),
    HomeRow("mandi", "Mandi", frozenset({"Mandi"})),
    HomeRow("fastfood", "Fast food", frozenset({"Pizza", "Burger", "Veg"})),
    HomeRow("dessert", "Desserts & drinks", frozenset({"Dessert", "Beverage"})),
)


def matches_search(restaurant: Restaurant, term: str) -> bool:
    """Case-insensitive substring match on name, cuisine or any dish name."""
    needle = term.strip().lower()
    return (
        needle in restaurant.name.lower()
        or needle in restaurant.cuisine.lower()
        or any(needle in item.name.lower() for item in restaurant.menu)
    )


def is_visible(restaurant: Restaurant, filters: FilterState) -> bool:
    mode = filters.mode
    if mode is FilterMode.SEARCH:
        return matches_search(restaurant, filters.search_term)
    if mode is FilterMode.CUISINE:
        return restaurant.cuisine == filters.cuisine
    if mode is FilterMode.TYPE:
        return any(filters.type_filter.matches(item) for item in restaurant.menu)
    return True


def visible_restaurants(restaurants: Iterable[Restaurant], filters: FilterState) -> list[Restaurant]:
    """Restaurants to list, in catalog order."""
    return [r for r in restaurants if is_visible(r, filters)]


def menu_preview(restaurant: Restaurant, type_filter: TypeFilter) -> tuple[MenuItem, ...]:
    """
    Up to three menu items to show on a restaurant card.

    With a type filter active the matching items are preferred; when none
    match, the first items of the unfiltered menu are shown instead.
    """
    items = restaurant.menu
    if not type_filter.is_all:
        items = tuple(item for item in restaurant.menu if type_filter.matches(item))
        if not items:
            items = restaurant.menu[:PREVIEW_SIZE]
    return tuple(items[:PREVIEW_SIZE])


def restaurant_cards(restaurants: Iterable[Restaurant], filters: FilterState) -> list[RestaurantCard]:
    return [
        RestaurantCard(restaurant, menu_preview(restaurant, filters.type_filter))
        for restaurant in visible_restaurants(restaurants, filters)
    ]


def all_dishes(restaurants: Iterable[Restaurant]) -> list[Dish]:
    """Every menu item of every restaurant, carrying the restaurant's rating."""
    return [
        Dish(item=item, restaurant_id=r.id, restaurant_name=r.name, rating=r.rating)
        for r in restaurants
        for item in r.menu
    ]


def select_dishes(
    restaurants: Iterable[Restaurant],
    predicate: Callable[[Dish], bool],
    limit: int = HOME_ROW_SIZE,
) -> list[Dish]:
    return [dish for dish in all_dishes(restaurants) if predicate(dish)][:limit]


def home_row_dishes(restaurants: Iterable[Restaurant], row: HomeRow) -> list[Dish]:
    return select_dishes(restaurants, lambda dish: dish.category in row.categories)
