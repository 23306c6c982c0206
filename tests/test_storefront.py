import asyncio
import json

import httpx
import pytest

from storefront import main
from storefront.client.api import StoreClient
from storefront.client.app import Storefront
from storefront.client.checkout import (
    EMPTY_CART_MESSAGE,
    ORDER_FAILED_MESSAGE,
    ORDER_PLACED_MESSAGE,
)
from storefront.client.document import CART, ORDERS, RESTAURANT_LIST, View, home_row_region
from storefront.client.cart import Cart
from storefront.client.models import DeliveryDetails
from storefront.client.state import AppState
from storefront.database import init_db


class FakeBackend:
    """In-memory catalog and order stores behind an httpx mock transport."""

    def __init__(self, restaurants=None, orders_up=True, submit_status=201):
        self.restaurants = restaurants
        self.orders = []
        self.orders_up = orders_up
        self.submit_status = submit_status
        self.requests = []

    def __call__(self, request):
        self.requests.append((request.method, request.url.path))
        if request.url.path == "/api/restaurants":
            if self.restaurants is None:
                return httpx.Response(500, json={"message": "Check restaurants.json"})
            return httpx.Response(200, json=self.restaurants)
        if request.method == "GET":
            if not self.orders_up:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=self.orders)

        if self.submit_status >= 400:
            return httpx.Response(self.submit_status, json={"detail": "boom"})
        body = json.loads(request.content)
        order_id = f"order{len(self.orders) + 1:06d}"
        self.orders.insert(0, dict(body, _id=order_id, createdAt="2026-03-14T18:05:00Z"))
        return httpx.Response(201, json={"success": True, "_id": order_id})

    def count(self, method, path=None):
        return sum(1 for m, p in self.requests if m == method and (path is None or p == path))


def make_shop(backend):
    client = StoreClient("http://testserver", transport=httpx.MockTransport(backend))
    return Storefront(client)


def run(coro):
    return asyncio.run(coro)


@pytest.fixture()
def details():
    return DeliveryDetails(name="Ravi Kumar", phone="9876543210", address="12 MG Road")


def test_start_renders_every_region(sample_records):
    backend = FakeBackend(restaurants=sample_records)
    shop = make_shop(backend)

    run(shop.start())

    assert len(shop.state.catalog) == 3
    assert "Reddys Kitchen" in shop.document.region(RESTAURANT_LIST)
    assert "Slice Theory" in shop.document.region(RESTAURANT_LIST)
    assert 'id="cart-empty"' in shop.document.region(CART)
    assert 'id="orders-empty"' in shop.document.region(ORDERS)
    assert "Chicken Biryani" in shop.document.region(home_row_region("biryani"))
    assert "Nothing here yet." not in shop.document.region(home_row_region("mandi"))
    assert shop.document.active_view is View.HOME
    assert shop.document.alerts == []


def test_catalog_failure_falls_back_to_demo_catalog():
    backend = FakeBackend(restaurants=None, orders_up=False)
    shop = make_shop(backend)

    run(shop.start())

    assert [r.id for r in shop.state.catalog] == ["r1", "r2"]
    assert "Mandi Special" in shop.document.region(RESTAURANT_LIST)
    assert shop.state.orders == []
    assert 'id="orders-empty"' in shop.document.region(ORDERS)
    assert shop.document.alerts == []


def test_add_to_cart_opens_cart(sample_records):
    shop = make_shop(FakeBackend(restaurants=sample_records))
    run(shop.load_catalog())

    assert shop.add_to_cart("r1", "r1-m0") is True
    assert shop.add_to_cart("r1", "r1-m0") is True

    cart_html = shop.document.region(CART)
    assert shop.document.active_view is View.CART
    assert "Chicken Biryani" in cart_html
    assert "₹480" in cart_html
    assert "₹520" in cart_html


def test_unknown_item_has_no_visible_effect(sample_records):
    shop = make_shop(FakeBackend(restaurants=sample_records))
    run(shop.load_catalog())

    assert shop.add_to_cart("r1", "r1-m42") is False
    assert shop.state.cart.is_empty
    assert shop.document.active_view is View.HOME


def test_cart_controls_rerender(sample_records):
    shop = make_shop(FakeBackend(restaurants=sample_records))
    run(shop.load_catalog())
    shop.add_to_cart("r2", "r2-m1")

    shop.increment("r2", "r2-m1")
    assert "₹300" in shop.document.region(CART)

    shop.decrement("r2", "r2-m1")
    shop.decrement("r2", "r2-m1")
    assert 'id="cart-empty"' in shop.document.region(CART)

    shop.add_to_cart("r3", "r3-m0")
    shop.remove("r3", "r3-m0")
    assert shop.state.cart.is_empty


def test_filters_update_listing_and_buttons(sample_records):
    shop = make_shop(FakeBackend(restaurants=sample_records))
    run(shop.load_catalog())

    shop.set_cuisine("Arabian")
    listing = shop.document.region(RESTAURANT_LIST)
    assert shop.document.active_cuisine == "Arabian"
    assert "Shoel Biriyani" in listing
    assert "Reddys Kitchen" not in listing

    shop.set_cuisine(None)
    shop.set_type("Pizza")
    listing = shop.document.region(RESTAURANT_LIST)
    assert shop.document.active_type == "Pizza"
    assert "Slice Theory" in listing
    assert "Shoel Biriyani" not in listing


def test_search_trims_term_and_opens_listing(sample_records):
    shop = make_shop(FakeBackend(restaurants=sample_records))
    run(shop.load_catalog())
    shop.set_cuisine("Italian")

    shop.search("  Biryani ")

    assert shop.state.filters.search_term == "Biryani"
    assert shop.document.active_view is View.RESTAURANTS
    listing = shop.document.region(RESTAURANT_LIST)
    assert "Reddys Kitchen" in listing
    assert "Slice Theory" not in listing


def test_search_with_no_match_shows_empty_state(sample_records):
    shop = make_shop(FakeBackend(restaurants=sample_records))
    run(shop.load_catalog())

    shop.search("sushi")

    assert "No restaurants found. Try another filter." in shop.document.region(RESTAURANT_LIST)


def test_jump_to_type_applies_filter_and_navigates(sample_records):
    shop = make_shop(FakeBackend(restaurants=sample_records))
    run(shop.load_catalog())

    shop.jump_to_type("Veg")

    assert shop.state.filters.type_filter.label == "Veg"
    assert shop.document.active_type == "Veg"
    assert shop.document.active_view is View.RESTAURANTS


def test_empty_cart_checkout_makes_no_request(sample_records, details):
    backend = FakeBackend(restaurants=sample_records)
    shop = make_shop(backend)
    run(shop.load_catalog())
    before = len(backend.requests)

    placed = run(shop.submit_checkout(details))

    assert placed is False
    assert len(backend.requests) == before
    assert shop.document.alerts == [EMPTY_CART_MESSAGE]
    assert shop.state.cart.is_empty


def test_successful_checkout(sample_records, details):
    backend = FakeBackend(restaurants=sample_records)
    shop = make_shop(backend)
    run(shop.start())
    shop.add_to_cart("r1", "r1-m0")
    shop.add_to_cart("r2", "r2-m0")
    shop.increment("r2", "r2-m0")

    placed = run(shop.submit_checkout(details))

    assert placed is True
    assert backend.count("POST", "/api/orders") == 1
    assert backend.count("GET", "/api/orders") == 2
    submitted = backend.orders[0]
    assert submitted["total"] == 1120
    assert submitted["customerName"] == "Ravi Kumar"

    assert shop.state.cart.is_empty
    assert shop.state.form == DeliveryDetails()
    assert details.name == "Ravi Kumar"
    assert 'id="cart-empty"' in shop.document.region(CART)
    assert [o.id for o in shop.state.orders] == ["order000001"]
    assert "Order #000001" in shop.document.region(ORDERS)
    assert "2 × Mandi Special (Shoel Biriyani)" in shop.document.region(ORDERS)
    assert shop.document.alerts == [ORDER_PLACED_MESSAGE]
    assert shop.document.active_view is View.ORDERS


def test_checkout_total_uses_cart_delivery_fee(sample_records, details):
    backend = FakeBackend(restaurants=sample_records)
    client = StoreClient("http://testserver", transport=httpx.MockTransport(backend))
    shop = Storefront(client, state=AppState(cart=Cart(delivery_fee=0)))
    run(shop.load_catalog())
    shop.add_to_cart("r1", "r1-m0")

    run(shop.submit_checkout(details))

    assert backend.orders[0]["total"] == shop.state.orders[0].total == 240


def test_failed_checkout_preserves_cart_and_form(sample_records, details):
    backend = FakeBackend(restaurants=sample_records, submit_status=500)
    shop = make_shop(backend)
    run(shop.load_catalog())
    shop.add_to_cart("r1", "r1-m0")

    placed = run(shop.submit_checkout(details))

    assert placed is False
    assert [(line.key, line.qty) for line in shop.state.cart] == [(("r1", "r1-m0"), 1)]
    assert shop.state.form.name == "Ravi Kumar"
    assert shop.document.alerts == [ORDER_FAILED_MESSAGE]
    assert shop.document.active_view is View.CART
    assert backend.count("GET", "/api/orders") == 0


def test_rendered_text_is_escaped():
    records = [{
        "_id": "x1", "name": "<script>alert(1)</script>", "cuisine": "Indian", "rating": 4.0,
        "time": "10 mins", "menu": [{"name": "Dal & Rice", "price": 99.5}],
    }]
    shop = make_shop(FakeBackend(restaurants=records))
    run(shop.load_catalog())

    listing = shop.document.region(RESTAURANT_LIST)
    assert "<script>" not in listing
    assert "&lt;script&gt;" in listing
    assert "Dal &amp; Rice" in listing
    assert "₹99.50" in listing


def test_end_to_end_against_backend(details):
    async def scenario():
        await init_db()
        transport = httpx.ASGITransport(app=main.app)
        async with StoreClient("http://testserver", transport=transport) as client:
            shop = Storefront(client)
            await shop.start()
            assert len(shop.state.catalog) == 4

            shop.add_to_cart("r1", "r1-m0")
            shop.add_to_cart("r1", "r1-m0")
            placed = await shop.submit_checkout(details)
            return shop, placed

    shop, placed = run(scenario())

    assert placed is True
    assert shop.document.alerts == [ORDER_PLACED_MESSAGE]
    newest = shop.state.orders[0]
    assert newest.customer_name == "Ravi Kumar"
    assert newest.total == 520
    assert [(i.name, i.qty) for i in newest.items] == [("Chicken Biryani", 2)]
