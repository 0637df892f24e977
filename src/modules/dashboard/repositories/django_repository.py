from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List

from django.db import models
from django.db.models import Count, Sum
from django.db.models.functions import TruncDate

from modules.catalog.models import Product
from modules.customers.models import Customer
from modules.dashboard.repositories.interfaces import IDashboardRepository
from modules.orders.constants import PaymentStatus
from modules.orders.models import Order, OrderItem
from modules.reviews.models import Review


class DashboardDjangoRepository(IDashboardRepository):
    def count_orders(self) -> int:
        return Order.objects.count()

    def paid_revenue(self) -> Decimal:
        total = Order.objects.filter(payment_status=PaymentStatus.PAID).aggregate(
            total=Sum("total_amount")
        )["total"]
        return total or Decimal("0.00")

    def count_customers(self, is_guest: bool) -> int:
        return Customer.objects.filter(is_guest=is_guest).count()

    def count_products(self) -> int:
        return Product.objects.count()

    def orders_by_status(self) -> Dict[str, int]:
        rows = Order.objects.order_by().values("status").annotate(count=Count("id"))
        return {row["status"]: row["count"] for row in rows}

    def low_stock(self, threshold: int) -> models.QuerySet:
        return Product.objects.filter(
            is_active=True, stock_quantity__lte=threshold
        ).order_by("stock_quantity", "name")

    def count_pending_reviews(self) -> int:
        return Review.objects.filter(is_approved=False).count()

    def recent_orders(self, limit: int) -> models.QuerySet:
        return Order.objects.select_related("customer").order_by("-created_at", "-id")[
            :limit
        ]

    def daily_paid_sales(self, since: datetime) -> List[Dict[str, Any]]:
        rows = (
            Order.objects.filter(payment_status=PaymentStatus.PAID, created_at__gte=since)
            .annotate(date=TruncDate("created_at"))
            .order_by()
            .values("date")
            .annotate(total=Sum("total_amount"), count=Count("id"))
            .order_by("date")
        )
        return list(rows)

    def top_selling(self, limit: int) -> List[Dict[str, Any]]:
        rows = (
            OrderItem.objects.order_by()
            .values("product_id", "product_name")
            .annotate(total_quantity=Sum("quantity"), total_revenue=Sum("total_price"))
            .order_by("-total_quantity", "product_name")[:limit]
        )
        return list(rows)
