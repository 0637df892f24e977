"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``UpdateOrderStatusDTO``: admin status transition request.
- ``PlaceOrderItemDTO`` / ``PlaceOrderDTO``: checkout commit.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modules.orders.constants import OrderStatus, PaymentMethod

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class UpdateOrderStatusDTO(BaseModel):
    """An unknown ``status`` value fails validation before the service runs."""

    model_config = ConfigDict(frozen=True)

    status: OrderStatus
    notes: Optional[str] = Field(default=None, max_length=1000)


class PlaceOrderItemDTO(BaseModel):
    """A single checkout line.

    ``unit_price`` is resolved by the Service Layer from the product catalog.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int
    variant_name: str = ""

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class PlaceOrderDTO(BaseModel):
    """Immutable DTO for the checkout commit.

    Validates:
    - ``items`` must contain at least one item.
    - a product appears at most once.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: Optional[UUID] = None
    items: List[PlaceOrderItemDTO]
    coupon_code: Optional[str] = None
    shipping_address: Dict[str, Any] = Field(default_factory=dict)
    billing_address: Dict[str, Any] = Field(default_factory=dict)
    payment_method: PaymentMethod = PaymentMethod.COD
    notes: str = ""

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[PlaceOrderItemDTO]
    ) -> List[PlaceOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    @model_validator(mode="after")
    def no_duplicate_products(self):
        """Prevent duplicate product IDs in the same order."""
        product_ids = [item.product_id for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValueError("Duplicate product IDs are not allowed in the same order.")
        return self
