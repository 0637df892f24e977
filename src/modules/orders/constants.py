"""Order domain constants.

Defines status choices and the valid transitions of the order state
machine.  Fulfilment moves forward along ``STATUS_SEQUENCE`` (skipping
steps is allowed); ``cancelled`` and ``returned`` branch off any
non-terminal state.  Terminal states accept nothing.
"""

from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    PLACED = "placed", "Placed"
    CONFIRMED = "confirmed", "Confirmed"
    PROCESSING = "processing", "Processing"
    SHIPPED = "shipped", "Shipped"
    OUT_FOR_DELIVERY = "out_for_delivery", "Out for delivery"
    DELIVERED = "delivered", "Delivered"
    CANCELLED = "cancelled", "Cancelled"
    RETURNED = "returned", "Returned"


class PaymentStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    FAILED = "failed", "Failed"
    REFUNDED = "refunded", "Refunded"


class PaymentMethod(models.TextChoices):
    COD = "cod", "Cash on delivery"
    CARD = "card", "Card"
    UPI = "upi", "UPI"
    WALLET = "wallet", "Wallet"


STATUS_SEQUENCE: tuple[str, ...] = (
    OrderStatus.PLACED,
    OrderStatus.CONFIRMED,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)

TERMINAL_STATES: frozenset[str] = frozenset(
    {OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.RETURNED}
)


def _allowed_from(status: str) -> frozenset[str]:
    if status in TERMINAL_STATES:
        return frozenset()
    later = STATUS_SEQUENCE[STATUS_SEQUENCE.index(status) + 1 :]
    return frozenset(later) | {OrderStatus.CANCELLED, OrderStatus.RETURNED}


VALID_TRANSITIONS: dict[str, frozenset[str]] = {
    status: _allowed_from(status) for status in OrderStatus.values
}

ORDER_NUMBER_MAX_RETRIES = 5

TAX_AMOUNT = Decimal("0.00")
