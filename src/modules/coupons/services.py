"""Coupon service layer.

``validate`` decides whether a code may be applied to an order amount and
computes the discount; ``redeem`` consumes one use at checkout.  Checks
run in a fixed order and the first failure wins:

1. the code exists (``CouponNotFound``),
2. the coupon is active,
3. ``starts_at <= now <= expires_at`` (both ends inclusive; an ``ends_at``
   at midnight UTC is a bare expiry date and covers that whole day),
4. the order amount reaches ``minimum_purchase``,
5. ``usage_count < usage_limit`` when a limit is set,
6. the customer has fewer than ``user_usage_limit`` redemptions
   (guests skip this check).

Discounts are rounded half-up to cents.  A percentage discount is capped
at ``maximum_discount``; a fixed discount never exceeds the order amount.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta, timezone as dt_timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction
from django.utils import timezone

from modules.coupons.constants import CENT, MAX_PERCENTAGE, DiscountType
from modules.coupons.dtos import CouponQuote
from modules.coupons.exceptions import (
    CouponAlreadyExists,
    CouponInactive,
    CouponMinimumNotMet,
    CouponNotFound,
    CouponOutsideWindow,
    CouponUsageLimitReached,
    CouponUserLimitReached,
    InvalidCoupon,
)
from modules.coupons.models import Coupon

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.coupons.dtos import CreateCouponDTO, UpdateCouponDTO
    from modules.coupons.models import CouponUsage
    from modules.coupons.repositories.interfaces import ICouponRepository

logger = structlog.get_logger(__name__)


def compute_discount(coupon: Coupon, order_amount: Decimal) -> Decimal:
    """Discount ``coupon`` grants on ``order_amount``, rounded to cents."""
    if coupon.discount_type == DiscountType.PERCENTAGE:
        discount = order_amount * coupon.discount_value / Decimal(100)
        if coupon.maximum_discount is not None:
            discount = min(discount, coupon.maximum_discount)
    else:
        discount = coupon.discount_value
    discount = min(discount, order_amount)
    return discount.quantize(CENT, rounding=ROUND_HALF_UP)


def expires_at(coupon: Coupon) -> datetime:
    """Last instant at which ``coupon`` is valid."""
    ends_at = coupon.ends_at.astimezone(dt_timezone.utc)
    if ends_at.time() == time.min:
        return ends_at + timedelta(days=1) - timedelta(microseconds=1)
    return ends_at


class CouponService:
    """Receives an ``ICouponRepository`` via constructor injection (DIP)."""

    def __init__(self, repository: ICouponRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Admin commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_coupon(self, dto: CreateCouponDTO) -> Coupon:
        """Raises ``CouponAlreadyExists`` if the code is taken."""
        log = logger.bind(code=dto.code)
        if self._repo.get_by_code(dto.code):
            log.warning("coupon.duplicate_code")
            raise CouponAlreadyExists("Coupon code already exists")

        coupon = self._repo.save(Coupon(**dto.model_dump()))
        log.info("coupon.created", coupon_id=str(coupon.id))
        return coupon

    @transaction.atomic
    def update_coupon(self, id: str, dto: UpdateCouponDTO) -> Coupon:
        """Apply the supplied fields, then re-check cross-field rules.

        Raises:
            CouponNotFound: the coupon does not exist.
            CouponAlreadyExists: the new code belongs to another coupon.
            InvalidCoupon: the merged coupon is inconsistent.
        """
        coupon = self._repo.get_for_update(id)
        if coupon is None:
            raise CouponNotFound(f"Coupon {id} not found.")

        changes = dto.model_dump(exclude_unset=True)
        log = logger.bind(coupon_id=str(id))

        code = changes.get("code")
        if code and code != coupon.code:
            existing = self._repo.get_by_code(code)
            if existing and existing.id != coupon.id:
                log.warning("coupon.duplicate_code", code=code)
                raise CouponAlreadyExists("Coupon code already exists")

        nullable = {"maximum_discount", "usage_limit"}
        for field, value in changes.items():
            if value is None and field not in nullable:
                continue
            setattr(coupon, field, value)

        self._check_consistency(coupon)
        coupon = self._repo.save(coupon)
        log.info("coupon.updated", fields=sorted(changes))
        return coupon

    @transaction.atomic
    def delete_coupon(self, id: str) -> None:
        coupon = self.get_coupon(id)
        self._repo.delete(str(coupon.id))
        logger.info("coupon.deleted", coupon_id=str(id), code=coupon.code)

    # ------------------------------------------------------------------
    # Validation & redemption
    # ------------------------------------------------------------------

    def validate(
        self,
        code: str,
        order_amount: Decimal,
        customer_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> CouponQuote:
        """Check whether ``code`` applies to ``order_amount``.

        Raises ``CouponNotFound`` or a ``CouponNotApplicable`` subclass
        naming the first rule that failed.
        """
        coupon = self._repo.get_by_code(code)
        if coupon is None:
            raise CouponNotFound("Coupon not found")
        quote = self._check(coupon, order_amount, customer_id, now)
        logger.info(
            "coupon.validated",
            coupon_id=str(coupon.id),
            order_amount=str(order_amount),
            discount=str(quote.discount),
        )
        return quote

    def redeem(
        self,
        code: str,
        order_amount: Decimal,
        customer_id: Optional[str],
        order_id: str,
    ) -> CouponQuote:
        """Consume one use of the coupon for ``order_id``.

        Must run inside the caller's transaction (the checkout that creates
        the order), so the order, the counter and the usage record commit
        or roll back together.  The coupon row is locked for the per-user
        check; the global limit is enforced by a conditional UPDATE.
        """
        found = self._repo.get_by_code(code)
        if found is None:
            raise CouponNotFound("Coupon not found")
        coupon = self._repo.get_for_update(str(found.id))
        if coupon is None:
            raise CouponNotFound("Coupon not found")

        quote = self._check(coupon, order_amount, customer_id)

        if not self._repo.increment_usage(str(coupon.id)):
            logger.warning("coupon.usage_limit_race", coupon_id=str(coupon.id))
            raise CouponUsageLimitReached("Coupon usage limit reached")
        self._repo.add_usage(
            str(coupon.id), str(customer_id) if customer_id else None, str(order_id)
        )

        logger.info(
            "coupon.redeemed",
            coupon_id=str(coupon.id),
            order_id=str(order_id),
            customer_id=str(customer_id) if customer_id else None,
            discount=str(quote.discount),
        )
        return quote

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_coupons(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet:
        return self._repo.list(filters)

    def get_coupon(self, id: str) -> Coupon:
        coupon = self._repo.get_by_id(id)
        if coupon is None:
            raise CouponNotFound(f"Coupon {id} not found.")
        return coupon

    def usage_history(self, coupon: Coupon) -> QuerySet[CouponUsage]:
        return self._repo.usages_for(str(coupon.id))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check(
        self,
        coupon: Coupon,
        order_amount: Decimal,
        customer_id: Optional[str],
        now: Optional[datetime] = None,
    ) -> CouponQuote:
        now = now or timezone.now()
        log = logger.bind(coupon_id=str(coupon.id), code=coupon.code)

        if not coupon.is_active:
            log.info("coupon.rejected", reason="inactive")
            raise CouponInactive("Coupon is not active")
        if not coupon.starts_at <= now <= expires_at(coupon):
            log.info("coupon.rejected", reason="outside_window")
            raise CouponOutsideWindow("Coupon is not valid at this time")
        if order_amount < coupon.minimum_purchase:
            log.info("coupon.rejected", reason="minimum_purchase")
            raise CouponMinimumNotMet(
                f"Minimum purchase of {coupon.minimum_purchase} required"
            )
        if coupon.usage_limit is not None and coupon.usage_count >= coupon.usage_limit:
            log.info("coupon.rejected", reason="usage_limit")
            raise CouponUsageLimitReached("Coupon usage limit reached")
        if customer_id is not None:
            used = self._repo.count_usages(str(coupon.id), str(customer_id))
            if used >= coupon.user_usage_limit:
                log.info("coupon.rejected", reason="user_limit")
                raise CouponUserLimitReached("You have already used this coupon")

        return CouponQuote(
            coupon=coupon,
            order_amount=order_amount,
            discount=compute_discount(coupon, order_amount),
        )

    @staticmethod
    def _check_consistency(coupon: Coupon) -> None:
        if coupon.ends_at <= coupon.starts_at:
            raise InvalidCoupon("ends_at must be after starts_at")
        if (
            coupon.discount_type == DiscountType.PERCENTAGE
            and coupon.discount_value > MAX_PERCENTAGE
        ):
            raise InvalidCoupon("Percentage discount cannot exceed 100")
        if coupon.usage_limit is not None and coupon.usage_limit < coupon.usage_count:
            raise InvalidCoupon("usage_limit cannot be lower than the current usage count")
