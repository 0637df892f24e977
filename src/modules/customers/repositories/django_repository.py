"""Django ORM implementation of the Customer repository.

Methods return ``None`` instead of raising for missing rows; the service
decides how a missing entity becomes an API error.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Iterable, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    def get_by_id(self, id: str) -> Optional[Customer]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return Customer.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        entity.save()
        logger.info("customer.saved", customer_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        deleted, _ = Customer.objects.filter(id=id).delete()
        return deleted > 0

    def count_orders(self, customer_id: str) -> int:
        from modules.orders.models import Order

        return Order.objects.filter(customer_id=customer_id).count()

    def orders_for(self, customer_id: str) -> models.QuerySet:
        from modules.orders.models import Order

        return Order.objects.filter(customer_id=customer_id).order_by(
            "-created_at", "-id"
        )

    def get_many(self, ids: Iterable[str]) -> List[Customer]:
        valid = []
        for value in ids:
            try:
                valid.append(uuid.UUID(str(value)))
            except ValueError:
                continue
        return list(Customer.objects.filter(id__in=valid))
