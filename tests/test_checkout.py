import pytest

from storefront.client.cart import Cart
from storefront.client.checkout import EMPTY_CART_MESSAGE, build_order_payload
from storefront.client.errors import EmptyCartError
from storefront.client.models import DeliveryDetails


@pytest.fixture()
def details():
    return DeliveryDetails(name="Ravi Kumar", phone="9876543210", address="12 MG Road")


def test_empty_cart_is_rejected(details):
    with pytest.raises(EmptyCartError, match=EMPTY_CART_MESSAGE):
        build_order_payload(Cart(), details)


def test_payload_total_includes_delivery_fee(catalog, details):
    cart = Cart()
    cart.add(catalog, "r1", "r1-m0")
    cart.add(catalog, "r2", "r2-m0")
    cart.increment("r2", "r2-m0")

    payload = build_order_payload(cart, details)

    assert payload["total"] == 240 + 420 * 2 + 40 == 1120
    assert payload["items"] == [
        {"restaurantName": "Reddys Kitchen", "name": "Chicken Biryani", "qty": 1, "price": 240},
        {"restaurantName": "Shoel Biriyani", "name": "Mandi Special", "qty": 2, "price": 420},
    ]
    assert payload["customerName"] == "Ravi Kumar"
    assert payload["phone"] == "9876543210"
    assert payload["address"] == "12 MG Road"
    assert payload["payment"] == "Cash on Delivery"


def test_explicit_delivery_fee_overrides_cart_fee(catalog, details):
    cart = Cart()
    cart.add(catalog, "r1", "r1-m0")

    assert build_order_payload(cart, details, delivery_fee=0)["total"] == 240


def test_building_payload_leaves_cart_untouched(catalog, details):
    cart = Cart()
    cart.add(catalog, "r1", "r1-m0")
    build_order_payload(cart, details)

    assert [(line.key, line.qty) for line in cart] == [(("r1", "r1-m0"), 1)]


def test_form_reset_restores_defaults(details):
    details.payment = "UPI"
    details.reset()

    assert details == DeliveryDetails()
