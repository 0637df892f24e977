"""Coupon repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.coupons.models import Coupon, CouponUsage


class ICouponRepository(IRepository["Coupon"]):
    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Coupon]":
        """Coupons, newest first."""

    @abstractmethod
    def get_by_code(self, code: str) -> Optional[Coupon]:
        """Exact match on the upper-cased code."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Coupon]:
        """Retrieve a coupon with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def count_usages(self, coupon_id: str, customer_id: str) -> int:
        """Redemptions of the coupon by one customer."""

    @abstractmethod
    def increment_usage(self, coupon_id: str) -> bool:
        """Atomically bump ``usage_count`` if still below ``usage_limit``.

        Returns ``False`` when the limit was already reached.
        """

    @abstractmethod
    def add_usage(
        self, coupon_id: str, customer_id: Optional[str], order_id: str
    ) -> CouponUsage:
        """Append a redemption record."""

    @abstractmethod
    def usages_for(self, coupon_id: str) -> "models.QuerySet[CouponUsage]":
        """Redemption history of a coupon, newest first."""
