"""Order domain exceptions.

Raised by the service layer when business rules are violated.  The API
layer (views) catches these and translates them into error envelopes.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The requested order does not exist."""


class InvalidOrderStatus(Exception):
    """The status transition is not allowed from the current status."""


class CustomerNotFound(Exception):
    """The customer placing the order does not exist."""


class InactiveCustomer(Exception):
    """Suspended customers cannot place orders."""


class ProductNotFound(Exception):
    """A product referenced by an order item does not exist."""


class InactiveProduct(Exception):
    """A product referenced by an order item is inactive."""


class InsufficientStock(Exception):
    """Not enough stock to fulfil an order item."""
