"""
SQLAlchemy Database Models

The order store is a single flat table: one row per placed order, with
the ordered line items kept as a JSON document alongside the customer's
delivery details.
"""

import json
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Float, DateTime, Text
from storefront.database import Base


def _new_order_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Order(Base):
    """
    Placed order.

    Immutable once written; the storefront only ever appends and lists.
    """
    __tablename__ = "orders"

    # Primary Key (exposed to clients as ``_id``)
    id = Column(String(32), primary_key=True, default=_new_order_id)

    # =========================================================================
    # CUSTOMER INFORMATION
    # =========================================================================
    customer_name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False, index=True)
    address = Column(String(255), nullable=False)

    # =========================================================================
    # ORDER DETAILS
    # =========================================================================
    items = Column(Text, nullable=False)  # JSON string of ordered items
    payment_method = Column(String(50), nullable=False)

    # =========================================================================
    # PRICING
    # =========================================================================
    subtotal = Column(Float, nullable=False)
    delivery_fee = Column(Float, nullable=False, default=0.0)
    total_amount = Column(Float, nullable=False)

    # =========================================================================
    # TIMESTAMPS
    # =========================================================================
    created_at = Column(DateTime(timezone=True), default=_utc_now, nullable=False, index=True)

    @property
    def item_list(self) -> list[dict]:
        """Decoded line items."""
        return json.loads(self.items) if self.items else []

    def __repr__(self):
        return f"<Order #{self.id[-6:]} - {self.customer_name} - {self.total_amount}>"
