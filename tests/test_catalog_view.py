import pytest

from storefront.client.catalog import build_catalog, demo_catalog
from storefront.client.catalog_view import (
    HOME_ROWS,
    all_dishes,
    home_row_dishes,
    menu_preview,
    restaurant_cards,
    visible_restaurants,
)
from storefront.client.filters import FilterMode, FilterState, TypeFilter, TypeFilterKind
from storefront.core.config import get_settings


def _ids(restaurants):
    return [r.id for r in restaurants]


def _row(key):
    return next(row for row in HOME_ROWS if row.key == key)


def test_no_filters_lists_everything_in_catalog_order(catalog):
    assert _ids(visible_restaurants(catalog, FilterState())) == ["r1", "r2", "r3"]


def test_search_overrides_cuisine_and_type(catalog):
    filters = FilterState(
        cuisine="Italian",
        type_filter=TypeFilter.from_label("Mandi"),
        search_term="biryani",
    )

    assert filters.mode is FilterMode.SEARCH
    # "Shoel Biriyani" is spelled differently and has no biryani dish
    assert _ids(visible_restaurants(catalog, filters)) == ["r1"]


@pytest.mark.parametrize(
    "term, expected",
    [
        ("BIRI", ["r2"]),
        ("indian", ["r1"]),
        ("pizza", ["r3"]),
        ("chicken", ["r1", "r2"]),
        ("sushi", []),
    ],
)
def test_search_matches_name_cuisine_or_dish(catalog, term, expected):
    assert _ids(visible_restaurants(catalog, FilterState(search_term=term))) == expected


def test_blank_search_term_is_not_a_search(catalog):
    filters = FilterState(cuisine="Italian", search_term="   ")

    assert filters.mode is FilterMode.CUISINE
    assert _ids(visible_restaurants(catalog, filters)) == ["r3"]


def test_cuisine_filter_ignores_type(catalog):
    filters = FilterState(cuisine="Arabian", type_filter=TypeFilter.from_label("Veg"))

    assert filters.mode is FilterMode.CUISINE
    assert _ids(visible_restaurants(catalog, filters)) == ["r2"]


def test_cuisine_with_unmatched_type_falls_back_to_first_three_items(catalog):
    filters = FilterState(cuisine="Arabian", type_filter=TypeFilter.from_label("Veg"))
    [card] = restaurant_cards(catalog, filters)

    assert [item.id for item in card.preview] == ["r2-m0", "r2-m1", "r2-m2"]


@pytest.mark.parametrize(
    "label, expected",
    [
        ("Veg", ["r1", "r3"]),
        ("Non-Veg", ["r1", "r2", "r3"]),
        ("Mandi", ["r2"]),
        ("Pizza", ["r3"]),
        ("Sushi", []),
    ],
)
def test_type_filter_keeps_restaurants_with_a_matching_item(catalog, label, expected):
    filters = FilterState(type_filter=TypeFilter.from_label(label))

    assert filters.mode is FilterMode.TYPE
    assert _ids(visible_restaurants(catalog, filters)) == expected


def test_type_filter_prefers_matching_items_in_preview(catalog):
    filters = FilterState(type_filter=TypeFilter.from_label("Veg"))
    cards = {card.restaurant.id: card for card in restaurant_cards(catalog, filters)}

    assert [item.id for item in cards["r1"].preview] == ["r1-m1", "r1-m2", "r1-m3"]
    assert [item.id for item in cards["r3"].preview] == ["r3-m0"]


def test_preview_is_capped_at_three(catalog):
    r2 = catalog.restaurant("r2")

    assert len(menu_preview(r2, TypeFilter())) == 3
    assert len(menu_preview(r2, TypeFilter.from_label("Non-Veg"))) == 3


def test_all_veg_filter_on_non_veg_restaurant_shows_first_items(catalog):
    preview = menu_preview(catalog.restaurant("r2"), TypeFilter.from_label("Veg"))

    assert [item.name for item in preview] == ["Mandi Special", "Chicken Shawarma", "Mutton Mandi"]


@pytest.mark.parametrize(
    "label, kind",
    [
        (None, TypeFilterKind.ALL),
        ("", TypeFilterKind.ALL),
        ("all", TypeFilterKind.ALL),
        ("Veg", TypeFilterKind.VEG),
        ("Non-Veg", TypeFilterKind.NON_VEG),
        ("Biryani", TypeFilterKind.CATEGORY),
    ],
)
def test_type_filter_labels(label, kind):
    type_filter = TypeFilter.from_label(label)

    assert type_filter.kind is kind
    assert type_filter.label == (label or "all")


def test_all_dishes_carry_restaurant_details(catalog):
    dishes = all_dishes(catalog)

    assert len(dishes) == 10
    first = dishes[0]
    assert (first.id, first.restaurant_id, first.restaurant_name, first.rating) == (
        "r1-m0", "r1", "Reddys Kitchen", 4.6,
    )
    assert [d.restaurant_id for d in dishes[-2:]] == ["r3", "r3"]


def test_home_rows_select_by_category(catalog):
    assert [d.name for d in home_row_dishes(catalog, _row("biryani"))] == [
        "Chicken Biryani", "Veg Biryani",
    ]
    assert [d.name for d in home_row_dishes(catalog, _row("mandi"))] == [
        "Mandi Special", "Mutton Mandi",
    ]
    assert [d.name for d in home_row_dishes(catalog, _row("fastfood"))] == [
        "Margherita Pizza", "Pepperoni Pizza",
    ]
    assert [d.name for d in home_row_dishes(catalog, _row("dessert"))] == ["Gulab Jamun"]


def test_home_row_is_capped_at_six():
    catalog = build_catalog([
        {
            "_id": "big", "name": "Biryani House", "cuisine": "Indian", "rating": 4.1,
            "time": "40 mins",
            "menu": [{"name": f"Biryani {n}", "price": 100 + n, "category": "Biryani"} for n in range(8)],
        }
    ])
    dishes = home_row_dishes(catalog, _row("biryani"))

    assert [d.name for d in dishes] == [f"Biryani {n}" for n in range(6)]


def test_normalization_fills_display_defaults(catalog):
    settings = get_settings()
    r2 = catalog.restaurant("r2")
    shawarma = r2.menu[1]

    assert r2.image == settings.placeholder_image_url
    assert r2.emoji == settings.default_emoji
    assert shawarma.category == "Main Course"
    assert shawarma.rating == 4.5
    assert shawarma.desc == ""
    assert shawarma.tags == "Non-Veg"


def test_demo_catalog_has_two_single_item_restaurants():
    catalog = demo_catalog()

    assert _ids(catalog) == ["r1", "r2"]
    assert [len(r.menu) for r in catalog] == [1, 1]
    _, item = catalog.lookup("r1", "r1-m0")
    assert (item.name, item.price) == ("Chicken Biryani", 240)
