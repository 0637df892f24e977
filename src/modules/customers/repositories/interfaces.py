"""Customer repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for storefront customers."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Customer]":
        """List customers with optional filters."""

    @abstractmethod
    def count_orders(self, customer_id: str) -> int:
        """Number of orders placed by the customer."""

    @abstractmethod
    def orders_for(self, customer_id: str) -> models.QuerySet:
        """The customer's orders, newest first."""

    @abstractmethod
    def get_many(self, ids: Iterable[str]) -> List[Customer]:
        """Customers matching ``ids``; unknown or malformed ids are skipped."""
