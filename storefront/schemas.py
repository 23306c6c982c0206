"""
Pydantic Schemas for Request/Response Validation

Wire format is camelCase (``customerName``, ``restaurantName``, ``createdAt``)
with record identifiers exposed as ``_id``, matching what the storefront
client sends and reads.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime


class WireModel(BaseModel):
    """Base for camelCase wire schemas."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# CATALOG SCHEMAS
# =============================================================================

class MenuItemRecord(WireModel):
    """Menu item as stored in the catalog file."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    name: str = Field(..., min_length=1, examples=["Chicken Biryani"])
    desc: Optional[str] = Field(None, examples=["Slow-cooked dum biryani"])
    price: float = Field(..., ge=0, examples=[240])
    veg: Optional[bool] = None
    category: Optional[str] = Field(None, examples=["Biryani"])
    rating: Optional[float] = Field(None, ge=0, le=5)


class RestaurantRecord(WireModel):
    """Restaurant with its menu, as stored in the catalog file."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str = Field(..., alias="_id", examples=["r1"])
    name: str = Field(..., min_length=1, examples=["Reddys Kitchen"])
    cuisine: str = Field(..., examples=["Indian"])
    rating: float = Field(..., ge=0, le=5, examples=[4.6])
    time: str = Field(..., examples=["30 mins"])
    image: Optional[str] = None
    emoji: Optional[str] = None
    menu: List[MenuItemRecord] = Field(default_factory=list)


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class OrderItemCreate(WireModel):
    """Single line of a checkout payload."""
    restaurant_name: str = Field(..., min_length=1, examples=["Reddys Kitchen"])
    name: str = Field(..., min_length=1, examples=["Chicken Biryani"])
    qty: int = Field(..., ge=1, examples=[2])
    price: float = Field(..., ge=0, examples=[240])

    @property
    def line_total(self) -> float:
        return round(self.qty * self.price, 2)


class OrderCreate(WireModel):
    """Checkout payload submitted by the storefront."""
    customer_name: str = Field(..., min_length=1, max_length=100, examples=["Ravi Kumar"])
    phone: str = Field(..., min_length=1, max_length=20, examples=["9876543210"])
    address: str = Field(..., min_length=1, max_length=255, examples=["12 MG Road, Hyderabad"])
    payment: str = Field(..., min_length=1, max_length=50, examples=["Cash on Delivery"])
    total: float = Field(..., ge=0, examples=[520])
    items: List[OrderItemCreate] = Field(..., min_length=1)

    @field_validator("customer_name", "phone", "address", "payment")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field must not be blank")
        return v.strip()


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class OrderItemResponse(WireModel):
    restaurant_name: str
    name: str
    qty: int
    price: float


class OrderResponse(WireModel):
    """A stored order."""
    id: str = Field(..., alias="_id")
    customer_name: str
    phone: str
    address: str
    payment: str
    total: float
    items: List[OrderItemResponse]
    created_at: datetime

    @classmethod
    def from_model(cls, order) -> "OrderResponse":
        """Build from an ``Order`` ORM row."""
        return cls(
            id=order.id,
            customer_name=order.customer_name,
            phone=order.phone,
            address=order.address,
            payment=order.payment_method,
            total=order.total_amount,
            items=[OrderItemResponse.model_validate(item) for item in order.item_list],
            created_at=order.created_at,
        )


class OrderCreateResponse(WireModel):
    """Response after successfully creating an order."""
    success: bool
    message: str
    id: str = Field(..., alias="_id")
    total: float
    created_at: datetime


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class CatalogErrorResponse(BaseModel):
    """Catalog file could not be served."""
    message: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    redis: str
    catalog: str
    timestamp: datetime
