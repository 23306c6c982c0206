"""
Checkout

Turns the cart and the delivery-details form into an order-store
submission. Line prices and quantities come from the cart snapshot, never
from the live catalog.
"""

from __future__ import annotations

from typing import Any, Optional

from storefront.client.cart import Cart
from storefront.client.errors import EmptyCartError
from storefront.client.models import DeliveryDetails, Number

EMPTY_CART_MESSAGE = "Your cart is empty."
ORDER_PLACED_MESSAGE = "✅ Order placed successfully!"
ORDER_FAILED_MESSAGE = "Failed to place order. Please try again."


def build_order_payload(
    cart: Cart,
    details: DeliveryDetails,
    delivery_fee: Optional[Number] = None,
) -> dict[str, Any]:
    """
    Build the order-store payload for the current cart.

    Args:
        cart: Non-empty cart
        details: Delivery details form
        delivery_fee: Flat fee to add (defaults to the cart's)

    Raises:
        EmptyCartError: If the cart has no lines
    """
    if cart.is_empty:
        raise EmptyCartError(EMPTY_CART_MESSAGE)

    fee = cart.delivery_fee if delivery_fee is None else delivery_fee
    return {
        "customerName": details.name,
        "phone": details.phone,
        "address": details.address,
        "payment": details.payment,
        "total": cart.subtotal() + fee,
        "items": [
            {
                "restaurantName": line.restaurant_name,
                "name": line.name,
                "qty": line.qty,
                "price": line.price,
            }
            for line in cart
        ],
    }
