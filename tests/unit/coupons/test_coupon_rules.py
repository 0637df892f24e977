"""Unit tests for coupon validation, discounts and redemption.

Covers:
- Percentage discounts capped by ``maximum_discount``; fixed discounts
  capped by the order amount; half-up rounding to cents.
- Minimum purchase, validity window (inclusive ends), usage limits and
  per-customer limits.
- Admin create/update guards (duplicate code, inconsistent window).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction
from freezegun import freeze_time
from pydantic import ValidationError

from modules.coupons.constants import DiscountType
from modules.coupons.dtos import CreateCouponDTO, UpdateCouponDTO
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
from modules.coupons.models import Coupon, CouponUsage
from modules.coupons.repositories.django_repository import CouponDjangoRepository
from modules.coupons.services import CouponService, compute_discount
from modules.orders.dtos import PlaceOrderDTO, PlaceOrderItemDTO

pytestmark = pytest.mark.unit

WINDOW_START = datetime(2026, 3, 1, tzinfo=dt_timezone.utc)
WINDOW_END = datetime(2026, 3, 31, 23, 59, 59, tzinfo=dt_timezone.utc)
# sent by the console as midnight UTC of the last valid day
EXPIRY_DATE = datetime(2026, 3, 31, tzinfo=dt_timezone.utc)


def _order(order_service, customer, product):
    return order_service.place_order(
        PlaceOrderDTO(
            customer_id=customer.id if customer else None,
            items=[PlaceOrderItemDTO(product_id=product.id, quantity=1)],
        )
    )


# ---------------------------------------------------------------------------
# Discount arithmetic
# ---------------------------------------------------------------------------


class TestComputeDiscount:
    def test_percentage_capped_by_maximum(self):
        coupon = Coupon(
            discount_type=DiscountType.PERCENTAGE,
            discount_value=Decimal("10"),
            maximum_discount=Decimal("20"),
        )
        assert compute_discount(coupon, Decimal("300")) == Decimal("20.00")
        assert compute_discount(coupon, Decimal("100")) == Decimal("10.00")

    def test_percentage_rounds_half_up(self):
        coupon = Coupon(discount_type=DiscountType.PERCENTAGE, discount_value=Decimal("15"))
        # 15% of 10.10 = 1.515
        assert compute_discount(coupon, Decimal("10.10")) == Decimal("1.52")

    def test_fixed_never_exceeds_order_amount(self):
        coupon = Coupon(discount_type=DiscountType.FIXED, discount_value=Decimal("25"))
        assert compute_discount(coupon, Decimal("18.50")) == Decimal("18.50")
        assert compute_discount(coupon, Decimal("100")) == Decimal("25.00")


# ---------------------------------------------------------------------------
# Validation rules
# ---------------------------------------------------------------------------


class TestValidate:
    def test_save10_scenarios(self, coupon_service, make_coupon):
        make_coupon()

        assert coupon_service.validate("SAVE10", Decimal("300")).discount == Decimal(
            "20.00"
        )
        assert coupon_service.validate("save10", Decimal("100")).discount == Decimal(
            "10.00"
        )
        with pytest.raises(CouponMinimumNotMet):
            coupon_service.validate("SAVE10", Decimal("40"))

    def test_final_amount(self, coupon_service, make_coupon):
        make_coupon()

        quote = coupon_service.validate("SAVE10", Decimal("100"))

        assert quote.final_amount == Decimal("90.00")
        assert quote.as_dict()["final_amount"] == "90.00"

    def test_unknown_code(self, coupon_service):
        with pytest.raises(CouponNotFound):
            coupon_service.validate("MISSING", Decimal("100"))

    def test_inactive(self, coupon_service, make_coupon):
        make_coupon(is_active=False)

        with pytest.raises(CouponInactive):
            coupon_service.validate("SAVE10", Decimal("100"))

    def test_window_ends_are_inclusive(self, coupon_service, make_coupon):
        make_coupon(starts_at=WINDOW_START, ends_at=WINDOW_END)

        with freeze_time(WINDOW_START):
            coupon_service.validate("SAVE10", Decimal("100"))
        with freeze_time(WINDOW_END):
            coupon_service.validate("SAVE10", Decimal("100"))

    def test_outside_window(self, coupon_service, make_coupon):
        make_coupon(starts_at=WINDOW_START, ends_at=WINDOW_END)

        with freeze_time(WINDOW_START - timedelta(seconds=1)):
            with pytest.raises(CouponOutsideWindow):
                coupon_service.validate("SAVE10", Decimal("100"))
        with freeze_time(WINDOW_END + timedelta(seconds=1)):
            with pytest.raises(CouponOutsideWindow):
                coupon_service.validate("SAVE10", Decimal("100"))

    def test_bare_expiry_date_covers_whole_day(self, coupon_service, make_coupon):
        make_coupon(starts_at=WINDOW_START, ends_at=EXPIRY_DATE)

        with freeze_time(EXPIRY_DATE + timedelta(hours=18)):
            coupon_service.validate("SAVE10", Decimal("100"))
        with freeze_time(EXPIRY_DATE + timedelta(days=1) - timedelta(seconds=1)):
            coupon_service.validate("SAVE10", Decimal("100"))
        with freeze_time(EXPIRY_DATE + timedelta(days=1)):
            with pytest.raises(CouponOutsideWindow):
                coupon_service.validate("SAVE10", Decimal("100"))

    def test_usage_limit_exhausted(self, coupon_service, make_coupon):
        make_coupon(usage_limit=5, usage_count=5)

        with pytest.raises(CouponUsageLimitReached):
            coupon_service.validate("SAVE10", Decimal("100"))

    def test_first_failing_rule_wins(self, coupon_service, make_coupon):
        make_coupon(is_active=False, minimum_purchase=Decimal("500"))

        with pytest.raises(CouponInactive):
            coupon_service.validate("SAVE10", Decimal("100"))


# ---------------------------------------------------------------------------
# Redemption
# ---------------------------------------------------------------------------


class TestRedeem:
    def test_usage_limit_allows_exactly_n(
        self, coupon_service, order_service, make_coupon, make_product
    ):
        coupon = make_coupon(
            code="LIMIT2",
            discount_type=DiscountType.FIXED,
            discount_value=Decimal("5"),
            minimum_purchase=Decimal("0"),
            maximum_discount=None,
            usage_limit=2,
        )
        product = make_product(stock_quantity=10)

        for _ in range(2):
            order = _order(order_service, None, product)
            coupon_service.redeem("LIMIT2", Decimal("20"), None, str(order.id))

        order = _order(order_service, None, product)
        with pytest.raises(CouponUsageLimitReached):
            coupon_service.redeem("LIMIT2", Decimal("20"), None, str(order.id))

        coupon.refresh_from_db()
        assert coupon.usage_count == 2

    def test_per_customer_limit(
        self, coupon_service, order_service, make_coupon, customer, product
    ):
        make_coupon(minimum_purchase=Decimal("0"))

        first = _order(order_service, customer, product)
        coupon_service.redeem("SAVE10", Decimal("25"), str(customer.id), str(first.id))

        second = _order(order_service, customer, product)
        with pytest.raises(CouponUserLimitReached):
            coupon_service.redeem(
                "SAVE10", Decimal("25"), str(customer.id), str(second.id)
            )

    def test_guests_skip_per_customer_limit(
        self, coupon_service, order_service, make_coupon, product
    ):
        make_coupon(minimum_purchase=Decimal("0"))

        for _ in range(2):
            order = _order(order_service, None, product)
            coupon_service.redeem("SAVE10", Decimal("25"), None, str(order.id))


class TestUsageLimitRace:
    """The conditional increment holds even when the limit check read a
    stale usage count."""

    def test_increment_stops_at_limit(self, make_coupon):
        coupon = make_coupon(usage_limit=1)
        repo = CouponDjangoRepository()

        assert repo.increment_usage(str(coupon.id)) is True
        assert repo.increment_usage(str(coupon.id)) is False

        coupon.refresh_from_db()
        assert coupon.usage_count == 1

    def test_increment_without_limit_always_succeeds(self, make_coupon):
        coupon = make_coupon(usage_limit=None)
        repo = CouponDjangoRepository()

        for _ in range(3):
            assert repo.increment_usage(str(coupon.id)) is True

        coupon.refresh_from_db()
        assert coupon.usage_count == 3

    def test_database_rejects_count_above_limit(self, make_coupon):
        coupon = make_coupon(usage_limit=1, usage_count=1)

        with pytest.raises(IntegrityError), transaction.atomic():
            Coupon.objects.filter(id=coupon.id).update(usage_count=2)

    def test_redeem_with_stale_count_is_rejected(
        self, monkeypatch, make_coupon, placed_order
    ):
        coupon = make_coupon(usage_limit=1, minimum_purchase=Decimal("0"))
        stale = Coupon.objects.get(id=coupon.id)
        # another checkout consumed the last use after our read
        Coupon.objects.filter(id=coupon.id).update(usage_count=1)

        repo = CouponDjangoRepository()
        monkeypatch.setattr(repo, "get_for_update", lambda id: stale)
        service = CouponService(repository=repo)

        with pytest.raises(CouponUsageLimitReached):
            service.redeem("SAVE10", Decimal("50"), None, str(placed_order.id))

        coupon.refresh_from_db()
        assert coupon.usage_count == 1
        assert not CouponUsage.objects.filter(coupon=coupon).exists()


# ---------------------------------------------------------------------------
# Admin management
# ---------------------------------------------------------------------------


class TestManageCoupons:
    def _create_dto(self, **overrides):
        data = {
            "code": "spring",
            "discount_type": DiscountType.PERCENTAGE,
            "discount_value": Decimal("15"),
            "starts_at": WINDOW_START,
            "ends_at": WINDOW_END,
        }
        data.update(overrides)
        return CreateCouponDTO(**data)

    def test_create_upper_cases_code(self, coupon_service):
        coupon = coupon_service.create_coupon(self._create_dto())
        assert coupon.code == "SPRING"

    def test_duplicate_code_is_case_insensitive(self, coupon_service):
        coupon_service.create_coupon(self._create_dto())

        with pytest.raises(CouponAlreadyExists):
            coupon_service.create_coupon(self._create_dto(code="Spring"))

    def test_dto_rejects_inverted_window(self):
        with pytest.raises(ValidationError):
            self._create_dto(starts_at=WINDOW_END, ends_at=WINDOW_START)

    def test_dto_rejects_percentage_over_100(self):
        with pytest.raises(ValidationError):
            self._create_dto(discount_value=Decimal("150"))

    def test_update_checks_merged_window(self, coupon_service):
        coupon = coupon_service.create_coupon(self._create_dto())

        with pytest.raises(InvalidCoupon):
            coupon_service.update_coupon(
                str(coupon.id),
                UpdateCouponDTO(ends_at=WINDOW_START - timedelta(days=1)),
            )

    def test_update_can_clear_usage_limit(self, coupon_service):
        coupon = coupon_service.create_coupon(self._create_dto(usage_limit=10))

        updated = coupon_service.update_coupon(
            str(coupon.id), UpdateCouponDTO(usage_limit=None)
        )

        assert updated.usage_limit is None

    def test_update_unknown(self, coupon_service):
        with pytest.raises(CouponNotFound):
            coupon_service.update_coupon(
                "not-a-uuid", UpdateCouponDTO(description="x")
            )
