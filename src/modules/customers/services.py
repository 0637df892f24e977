"""Customer service layer.

The admin console never edits storefront profiles; it browses them,
suspends or reactivates accounts and inspects their order history.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.customers.exceptions import CustomerNotFound
from modules.customers.models import Customer

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.customers.dtos import UpdateCustomerStatusDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    """Receives an ``ICustomerRepository`` via constructor injection (DIP)."""

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def set_status(self, id: str, dto: UpdateCustomerStatusDTO) -> Customer:
        """Activate or deactivate a customer.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._get(id)
        customer.is_active = dto.is_active
        customer = self._repo.save(customer)
        logger.info(
            "customer.status_changed",
            customer_id=str(id),
            is_active=customer.is_active,
        )
        return customer

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet:
        return self._repo.list(filters)

    def get_customer(self, id: str) -> Dict[str, Any]:
        """Customer plus the number of orders placed."""
        customer = self._get(id)
        return {"customer": customer, "orders_count": self._repo.count_orders(id)}

    def list_orders(self, id: str) -> QuerySet:
        self._get(id)
        return self._repo.orders_for(id)

    def _get(self, id: str) -> Customer:
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")
        return customer
