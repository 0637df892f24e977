"""Coupon and CouponUsage models.

Business rules implemented:
- ``code`` is stored upper-cased, so uniqueness is case-insensitive.
- ``usage_count`` never exceeds ``usage_limit``: it is only incremented by
  a conditional UPDATE (see ``CouponDjangoRepository.increment_usage``).
- ``CouponUsage`` is append-only; it backs the per-customer limit.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.coupons.constants import DiscountType


class Coupon(BaseModel):
    code = models.CharField(max_length=50, unique=True)
    description = models.CharField(max_length=200, blank=True, default="")
    discount_type = models.CharField(max_length=20, choices=DiscountType.choices)
    discount_value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    minimum_purchase = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    maximum_discount = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )
    usage_limit = models.PositiveIntegerField(null=True, blank=True)
    usage_count = models.PositiveIntegerField(default=0)
    user_usage_limit = models.PositiveIntegerField(default=1)
    applicable_products = models.JSONField(default=list, blank=True)
    applicable_categories = models.JSONField(default=list, blank=True)
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "coupons"
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(usage_limit__isnull=True)
                | models.Q(usage_count__lte=models.F("usage_limit")),
                name="coupons_usage_within_limit",
            ),
            models.CheckConstraint(
                condition=models.Q(ends_at__gt=models.F("starts_at")),
                name="coupons_window_ordered",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        if self.code:
            self.code = self.code.strip().upper()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.code


class CouponUsage(BaseModel):
    """One redemption of a coupon by a checkout.

    ``customer`` is ``None`` for guest checkouts; those redemptions count
    against ``usage_limit`` but not against any per-customer limit.
    """

    coupon = models.ForeignKey(
        Coupon, on_delete=models.CASCADE, related_name="usages"
    )
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="coupon_usages",
    )
    order = models.ForeignKey(
        "orders.Order", on_delete=models.CASCADE, related_name="coupon_usages"
    )
    used_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "coupon_usages"
        ordering = ["-used_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["coupon", "order"], name="coupon_usages_once_per_order"
            ),
        ]
        indexes = [
            models.Index(fields=["coupon", "customer"], name="coupon_usages_owner_idx"),
        ]

    def save(self, *args, **kwargs) -> None:
        if not self._state.adding:
            raise ValueError("Coupon usages are append-only.")
        super().save(*args, **kwargs)
