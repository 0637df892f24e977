from __future__ import annotations

from django.db import models


class NotificationType(models.TextChoices):
    ORDER = "order", "Order"
    PROMO = "promo", "Promo"
    PRICE_DROP = "price_drop", "Price drop"
    STOCK_ALERT = "stock_alert", "Stock alert"
    GENERAL = "general", "General"


class Segment(models.TextChoices):
    ALL = "all", "All"
    REGISTERED = "registered", "Registered"
    GUESTS = "guests", "Guests"


# title, body template (formatted with ``order_number``)
ORDER_STATUS_MESSAGES: dict[str, tuple[str, str]] = {
    "confirmed": ("Order confirmed", "Your order {order_number} has been confirmed."),
    "processing": ("Order processing", "We are preparing your order {order_number}."),
    "shipped": ("Order shipped", "Your order {order_number} is on its way."),
    "out_for_delivery": (
        "Out for delivery",
        "Your order {order_number} will be delivered today.",
    ),
    "delivered": ("Order delivered", "Your order {order_number} has been delivered."),
    "cancelled": ("Order cancelled", "Your order {order_number} has been cancelled."),
    "returned": ("Order returned", "Your return for order {order_number} is recorded."),
}
