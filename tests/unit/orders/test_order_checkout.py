"""Unit tests for ``OrderService.place_order``.

Covers:
- Price snapshots and totals (subtotal, shipping, discount).
- Stock deduction, and rollback of every line when one fails.
- Customer and product validation.
- Coupon redemption inside the checkout transaction.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from django.test import override_settings
from pydantic import ValidationError

from modules.coupons.exceptions import CouponMinimumNotMet, CouponNotFound
from modules.coupons.models import CouponUsage
from modules.orders.constants import OrderStatus, PaymentMethod, PaymentStatus
from modules.orders.dtos import PlaceOrderDTO, PlaceOrderItemDTO
from modules.orders.exceptions import (
    CustomerNotFound,
    InactiveCustomer,
    InactiveProduct,
    InsufficientStock,
    ProductNotFound,
)
from modules.orders.models import Order
from modules.orders.services import shipping_for

pytestmark = pytest.mark.unit


def _dto(customer=None, lines=(), **kwargs):
    return PlaceOrderDTO(
        customer_id=customer.id if customer else None,
        items=[
            PlaceOrderItemDTO(product_id=product.id, quantity=quantity)
            for product, quantity in lines
        ],
        **kwargs,
    )


# ---------------------------------------------------------------------------
# Shipping
# ---------------------------------------------------------------------------


class TestShipping:
    @override_settings(FREE_SHIPPING_THRESHOLD="50.00", FLAT_SHIPPING_FEE="5.99")
    def test_flat_fee_below_threshold(self):
        assert shipping_for(Decimal("49.99")) == Decimal("5.99")

    @override_settings(FREE_SHIPPING_THRESHOLD="50.00", FLAT_SHIPPING_FEE="5.99")
    def test_free_at_threshold(self):
        assert shipping_for(Decimal("50.00")) == Decimal("0.00")


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------


class TestPlaceOrder:
    def test_snapshots_and_totals(self, order_service, customer, make_product):
        earbuds = make_product(name="Earbuds", base_price=Decimal("30.00"))
        charger = make_product(
            name="Charger", base_price=Decimal("34.90"), sale_price=Decimal("29.90")
        )

        order = order_service.place_order(
            _dto(customer, [(earbuds, 1), (charger, 2)])
        )

        assert order.status == OrderStatus.PLACED
        assert order.payment_method == PaymentMethod.COD
        assert order.payment_status == PaymentStatus.PENDING
        assert order.subtotal == Decimal("89.80")
        assert order.shipping_amount == Decimal("0.00")
        assert order.total_amount == Decimal("89.80")
        assert order.order_number.startswith("ORD-")

        lines = {item.product_name: item for item in order.items.all()}
        assert lines["Charger"].unit_price == Decimal("29.90")
        assert lines["Charger"].total_price == Decimal("59.80")

    @override_settings(FREE_SHIPPING_THRESHOLD="50.00", FLAT_SHIPPING_FEE="5.99")
    def test_small_order_pays_shipping(self, order_service, customer, make_product):
        product = make_product(base_price=Decimal("10.00"))

        order = order_service.place_order(_dto(customer, [(product, 1)]))

        assert order.shipping_amount == Decimal("5.99")
        assert order.total_amount == Decimal("15.99")

    def test_deducts_stock(self, order_service, customer, product):
        order_service.place_order(_dto(customer, [(product, 3)]))

        product.refresh_from_db()
        assert product.stock_quantity == 47

    def test_price_change_does_not_touch_existing_items(self, placed_order, product):
        product.base_price = Decimal("99.00")
        product.save()

        item = placed_order.items.get()
        item.refresh_from_db()
        assert item.unit_price == Decimal("25.00")

    def test_guest_checkout(self, order_service, product):
        order = order_service.place_order(_dto(None, [(product, 2)]))

        assert order.customer is None

    def test_billing_defaults_to_shipping(self, order_service, customer, product):
        address = {"line1": "1 Main Street"}
        order = order_service.place_order(
            _dto(customer, [(product, 2)], shipping_address=address)
        )

        assert order.billing_address == address

    def test_insufficient_stock_rolls_back_every_line(
        self, order_service, customer, make_product
    ):
        plenty = make_product(stock_quantity=10)
        scarce = make_product(stock_quantity=1)

        with pytest.raises(InsufficientStock):
            order_service.place_order(_dto(customer, [(plenty, 2), (scarce, 5)]))

        plenty.refresh_from_db()
        scarce.refresh_from_db()
        assert plenty.stock_quantity == 10
        assert scarce.stock_quantity == 1
        assert Order.objects.count() == 0

    def test_unknown_customer(self, order_service, product):
        dto = PlaceOrderDTO(
            customer_id=uuid4(),
            items=[PlaceOrderItemDTO(product_id=product.id, quantity=1)],
        )
        with pytest.raises(CustomerNotFound):
            order_service.place_order(dto)

    def test_inactive_customer(self, order_service, customer, product):
        customer.is_active = False
        customer.save()

        with pytest.raises(InactiveCustomer):
            order_service.place_order(_dto(customer, [(product, 1)]))

    def test_unknown_product(self, order_service, customer):
        dto = PlaceOrderDTO(
            customer_id=customer.id,
            items=[PlaceOrderItemDTO(product_id=uuid4(), quantity=1)],
        )
        with pytest.raises(ProductNotFound):
            order_service.place_order(dto)

    def test_inactive_product(self, order_service, customer, make_product):
        product = make_product(is_active=False)

        with pytest.raises(InactiveProduct):
            order_service.place_order(_dto(customer, [(product, 1)]))


class TestCheckoutWithCoupon:
    def test_discount_applied_and_usage_recorded(
        self, order_service, customer, make_product, make_coupon
    ):
        product = make_product(base_price=Decimal("100.00"))
        coupon = make_coupon()

        order = order_service.place_order(
            _dto(customer, [(product, 1)], coupon_code="save10")
        )

        assert order.coupon_id == coupon.id
        assert order.discount_amount == Decimal("10.00")
        assert order.total_amount == Decimal("90.00")
        coupon.refresh_from_db()
        assert coupon.usage_count == 1
        assert CouponUsage.objects.filter(order=order, customer=customer).exists()

    def test_rejected_coupon_rolls_back_checkout(
        self, order_service, customer, product, make_coupon
    ):
        make_coupon(minimum_purchase=Decimal("500"))

        with pytest.raises(CouponMinimumNotMet):
            order_service.place_order(
                _dto(customer, [(product, 2)], coupon_code="SAVE10")
            )

        product.refresh_from_db()
        assert product.stock_quantity == 50
        assert Order.objects.count() == 0

    def test_unknown_coupon(self, order_service, customer, product):
        with pytest.raises(CouponNotFound):
            order_service.place_order(
                _dto(customer, [(product, 2)], coupon_code="NOPE")
            )


class TestPlaceOrderDTO:
    def test_requires_items(self):
        with pytest.raises(ValidationError):
            PlaceOrderDTO(items=[])

    def test_rejects_duplicate_products(self):
        product_id = uuid4()
        with pytest.raises(ValidationError, match="Duplicate"):
            PlaceOrderDTO(
                items=[
                    PlaceOrderItemDTO(product_id=product_id, quantity=1),
                    PlaceOrderItemDTO(product_id=product_id, quantity=2),
                ]
            )

    def test_rejects_zero_quantity(self):
        with pytest.raises(ValidationError):
            PlaceOrderItemDTO(product_id=uuid4(), quantity=0)
