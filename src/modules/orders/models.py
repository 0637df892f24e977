"""Order, OrderItem, and OrderStatusHistory models.

Business rules implemented:
- Status transitions follow ``VALID_TRANSITIONS`` (enforced at service layer).
- Each status change appends an ``OrderStatusHistory`` row naming the admin
  who made it.
- Order number auto-generated as human-readable identifier.
- ``customer`` is ``NULL`` for guest checkouts; deleting a customer keeps
  their orders.
- OrderItem snapshots product name and price at checkout; the row is never
  updated afterwards, and ``total_price`` is always ``quantity * unit_price``.
"""

from __future__ import annotations

import secrets
from decimal import Decimal
from typing import Any

import structlog
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel
from modules.orders.constants import (
    ORDER_NUMBER_MAX_RETRIES,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)

logger = structlog.get_logger(__name__)

_MONEY = {"max_digits": 12, "decimal_places": 2, "default": Decimal("0.00")}


class Order(BaseModel):
    """Order aggregate root.

    ``order_number`` is a human-readable identifier auto-generated on first
    save (format: ``ORD-YYYYMMDD-XXXXXX``).  The UUIDv7 ``id`` is used for
    all internal references and API lookups.
    """

    order_number: models.CharField = models.CharField(
        max_length=20, unique=True, editable=False
    )
    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    coupon: models.ForeignKey = models.ForeignKey(
        "coupons.Coupon",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PLACED,
    )
    subtotal: models.DecimalField = models.DecimalField(**_MONEY)
    discount_amount: models.DecimalField = models.DecimalField(**_MONEY)
    shipping_amount: models.DecimalField = models.DecimalField(**_MONEY)
    tax_amount: models.DecimalField = models.DecimalField(**_MONEY)
    total_amount: models.DecimalField = models.DecimalField(**_MONEY)
    shipping_address: models.JSONField = models.JSONField(default=dict, blank=True)
    billing_address: models.JSONField = models.JSONField(default=dict, blank=True)
    payment_method: models.CharField = models.CharField(
        max_length=20, choices=PaymentMethod.choices, default=PaymentMethod.COD
    )
    payment_status: models.CharField = models.CharField(
        max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING
    )
    payment_reference: models.CharField = models.CharField(
        max_length=100, blank=True, default=""
    )
    notes: models.TextField = models.TextField(blank=True, default="")
    shipped_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    delivered_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    cancelled_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    cancellation_reason: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is in a terminal state."""
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        allowed = VALID_TRANSITIONS.get(self.status, frozenset())
        return new_status in allowed

    # ------------------------------------------------------------------
    # Order number generation
    # ------------------------------------------------------------------

    @staticmethod
    def generate_order_number() -> str:
        """Generate a human-readable order number: ``ORD-YYYYMMDD-XXXXXX``."""
        now = timezone.now()
        suffix = secrets.token_hex(3).upper()
        return f"ORD-{now:%Y%m%d}-{suffix}"

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.order_number:
            for _attempt in range(ORDER_NUMBER_MAX_RETRIES):
                candidate = self.generate_order_number()
                if not Order.objects.filter(order_number=candidate).exists():
                    self.order_number = candidate
                    break
            else:
                raise RuntimeError(
                    f"Failed to generate unique order_number after "
                    f"{ORDER_NUMBER_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.order_number} ({self.status})"


class OrderItem(BaseModel):
    """Line item snapshot.

    ``product_name``, ``variant_name`` and ``unit_price`` are copied from the
    catalog at checkout and never change afterwards, even if the product is
    renamed, repriced or deleted (``product`` then becomes ``NULL``).
    """

    order: models.ForeignKey = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
    )
    product: models.ForeignKey = models.ForeignKey(
        "catalog.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )
    product_name: models.CharField = models.CharField(max_length=200)
    variant_name: models.CharField = models.CharField(
        max_length=100, blank=True, default=""
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    unit_price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
    )
    total_price: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        editable=False,
    )

    class Meta:
        db_table = "order_items"
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self._state.adding:
            raise ValueError("Order items are immutable once written.")
        self.total_price = self.quantity * self.unit_price
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.product_name} x{self.quantity} ({self.total_price})"


class OrderStatusHistory(BaseModel):
    """Append-only audit trail for order status transitions.

    ``old_status`` is ``NULL`` for the record written at checkout.
    ``changed_by`` holds the acting admin's id; ``NULL`` means the change
    was made by the system.
    """

    order: models.ForeignKey = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=OrderStatus.choices,
        null=True,
        blank=True,
    )
    new_status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
    )
    notes: models.TextField = models.TextField(blank=True, default="")
    changed_by: models.UUIDField = models.UUIDField(null=True, blank=True)

    class Meta:
        db_table = "order_status_history"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["order", "created_at"],
                name="osh_order_created_idx",
            ),
        ]

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self._state.adding:
            raise ValueError("Status history is append-only.")
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.order_id}: {self.old_status} -> {self.new_status}"
