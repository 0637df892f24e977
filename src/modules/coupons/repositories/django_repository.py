"""Django ORM implementation of the Coupon repository.

The usage counter is only ever changed with a conditional UPDATE::

    UPDATE coupons SET usage_count = usage_count + 1
    WHERE id = %s AND (usage_limit IS NULL OR usage_count < usage_limit)

so two concurrent redemptions can never push it past the limit, whatever
the isolation level of the backing database.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import F, Q
from django.utils import timezone

from modules.coupons.models import Coupon, CouponUsage
from modules.coupons.repositories.interfaces import ICouponRepository

logger = structlog.get_logger(__name__)


class CouponDjangoRepository(ICouponRepository):
    def get_by_id(self, id: str) -> Optional[Coupon]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return Coupon.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_code(self, code: str) -> Optional[Coupon]:
        return Coupon.objects.filter(code=code.strip().upper()).first()

    def get_for_update(self, id: str) -> Optional[Coupon]:
        try:
            return Coupon.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Coupon.objects.order_by("-created_at", "-id")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Coupon) -> Coupon:
        entity.save()
        logger.info("coupon.saved", coupon_id=str(entity.id), code=entity.code)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        deleted, _ = Coupon.objects.filter(id=id).delete()
        return deleted > 0

    def count_usages(self, coupon_id: str, customer_id: str) -> int:
        return CouponUsage.objects.filter(
            coupon_id=coupon_id, customer_id=customer_id
        ).count()

    def increment_usage(self, coupon_id: str) -> bool:
        updated = (
            Coupon.objects.filter(id=coupon_id)
            .filter(Q(usage_limit__isnull=True) | Q(usage_count__lt=F("usage_limit")))
            .update(usage_count=F("usage_count") + 1, updated_at=timezone.now())
        )
        return updated == 1

    def add_usage(
        self, coupon_id: str, customer_id: Optional[str], order_id: str
    ) -> CouponUsage:
        return CouponUsage.objects.create(
            coupon_id=coupon_id, customer_id=customer_id, order_id=order_id
        )

    def usages_for(self, coupon_id: str) -> models.QuerySet:
        return CouponUsage.objects.filter(coupon_id=coupon_id).select_related(
            "customer", "order"
        )
