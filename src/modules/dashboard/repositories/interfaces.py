"""Read-only queries behind the admin dashboard.

Unlike the other repositories this one owns no entity: every method is an
aggregate over orders, customers, products or reviews.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List

from django.db import models


class IDashboardRepository(ABC):
    @abstractmethod
    def count_orders(self) -> int: ...

    @abstractmethod
    def paid_revenue(self) -> Decimal: ...

    @abstractmethod
    def count_customers(self, is_guest: bool) -> int: ...

    @abstractmethod
    def count_products(self) -> int: ...

    @abstractmethod
    def orders_by_status(self) -> Dict[str, int]: ...

    @abstractmethod
    def low_stock(self, threshold: int) -> models.QuerySet:
        """Active products with ``stock_quantity <= threshold``, lowest first."""

    @abstractmethod
    def count_pending_reviews(self) -> int: ...

    @abstractmethod
    def recent_orders(self, limit: int) -> models.QuerySet: ...

    @abstractmethod
    def daily_paid_sales(self, since: datetime) -> List[Dict[str, Any]]:
        """``[{date, total, count}]`` for paid orders created since ``since``."""

    @abstractmethod
    def top_selling(self, limit: int) -> List[Dict[str, Any]]: ...
