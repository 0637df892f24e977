"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  Concurrency
control on status updates uses ``select_for_update()``; the surrounding
transaction is owned by the service.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.orders.models import Order, OrderItem, OrderStatusHistory
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any], items: List[Dict[str, Any]]) -> Order:
        order = Order(**data)
        order.save()
        for item_data in items:
            OrderItem(order=order, **item_data).save()

        logger.info("order.persisted", order_id=str(order.id), item_count=len(items))
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        Uses ``select_related`` for the customer FK and ``prefetch_related``
        for items and status history.  Prevents N+1.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return (
                Order.objects.select_related("customer", "coupon")
                .prefetch_related("items", "status_history")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        """List orders with optional filters.

        Examples of valid filters::

            {"status": "shipped"}
            {"customer_id": "..."}
        """
        queryset = Order.objects.select_related("customer").order_by(
            "-created_at", "-id"
        )
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        entity.save()
        logger.info("order.saved", order_id=str(entity.id), status=entity.status)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        deleted, _ = Order.objects.filter(id=id).delete()
        return deleted > 0

    # ------------------------------------------------------------------
    # Order-specific
    # ------------------------------------------------------------------

    def add_history(
        self,
        order_id: str,
        new_status: str,
        old_status: Optional[str] = None,
        notes: str = "",
        changed_by: Optional[str] = None,
    ) -> OrderStatusHistory:
        history = OrderStatusHistory(
            order_id=order_id,
            old_status=old_status,
            new_status=new_status,
            notes=notes,
            changed_by=changed_by,
        )
        history.save()
        logger.info(
            "order.history_added",
            order_id=str(order_id),
            old_status=old_status,
            new_status=new_status,
        )
        return history
