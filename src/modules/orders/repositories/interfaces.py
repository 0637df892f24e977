"""Order repository interface.

Extends ``IRepository[Order]`` with methods required by the Order
aggregate: creation with items, row locking for status transitions and
status history tracking.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db import models

    from modules.orders.models import Order, OrderStatusHistory


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes OrderItem children and
    OrderStatusHistory records.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any], items: List[Dict[str, Any]]) -> Order:
        """Create an order and its item snapshots.

        ``items`` are dicts with ``product_id``, ``product_name``,
        ``variant_name``, ``quantity`` and ``unit_price``.
        """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with prefetched items and status history."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> "models.QuerySet[Order]":
        """List orders newest first with optional filters."""

    @abstractmethod
    def add_history(
        self,
        order_id: str,
        new_status: str,
        old_status: Optional[str] = None,
        notes: str = "",
        changed_by: Optional[str] = None,
    ) -> OrderStatusHistory:
        """Record a status change in the order's audit trail."""
