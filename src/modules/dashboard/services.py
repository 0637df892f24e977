"""Admin dashboard aggregates.

Money leaves as strings with two decimals, matching how order amounts are
serialised everywhere else.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List

import structlog
from django.conf import settings
from django.utils import timezone

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.dashboard.dtos import SalesQuery
    from modules.dashboard.repositories.interfaces import IDashboardRepository

logger = structlog.get_logger(__name__)

RECENT_ORDERS_LIMIT = 10
LOW_STOCK_LIMIT = 20
TOP_SELLING_LIMIT = 10
CENT = Decimal("0.01")


def _money(value) -> str:
    return str(Decimal(value or 0).quantize(CENT))


class DashboardService:
    def __init__(self, repository: IDashboardRepository) -> None:
        self._repo = repository

    def stats(self) -> Dict[str, Any]:
        threshold = settings.LOW_STOCK_THRESHOLD
        return {
            "total_orders": self._repo.count_orders(),
            "total_revenue": _money(self._repo.paid_revenue()),
            "total_users": self._repo.count_customers(is_guest=False),
            "total_guests": self._repo.count_customers(is_guest=True),
            "total_products": self._repo.count_products(),
            "orders_by_status": self._repo.orders_by_status(),
            "low_stock_products": self._repo.low_stock(threshold).count(),
            "pending_reviews": self._repo.count_pending_reviews(),
        }

    def recent_orders(self) -> QuerySet:
        return self._repo.recent_orders(RECENT_ORDERS_LIMIT)

    def low_stock_products(self) -> QuerySet:
        return self._repo.low_stock(settings.LOW_STOCK_THRESHOLD)[:LOW_STOCK_LIMIT]

    def sales(self, query: SalesQuery) -> Dict[str, Any]:
        since = timezone.now() - timedelta(days=query.days)
        rows = self._repo.daily_paid_sales(since)
        total = sum((row["total"] or Decimal("0") for row in rows), Decimal("0"))
        return {
            "period": query.period,
            "data": [
                {
                    "date": row["date"].isoformat(),
                    "total": _money(row["total"]),
                    "count": row["count"],
                }
                for row in rows
            ],
            "total_sales": _money(total),
            "total_orders": sum(row["count"] for row in rows),
        }

    def top_selling(self) -> List[Dict[str, Any]]:
        return [
            {
                "product_id": str(row["product_id"]) if row["product_id"] else None,
                "product_name": row["product_name"],
                "total_quantity": row["total_quantity"],
                "total_revenue": _money(row["total_revenue"]),
            }
            for row in self._repo.top_selling(TOP_SELLING_LIMIT)
        ]
