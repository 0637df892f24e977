"""Integration tests for the admin coupon endpoints."""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from modules.coupons.models import Coupon

pytestmark = pytest.mark.integration

COUPONS_URL = "/api/v1/admin/coupons"


def _payload(**overrides):
    now = timezone.now()
    data = {
        "code": "summer",
        "discount_type": "percentage",
        "discount_value": "15.00",
        "minimum_purchase": "30.00",
        "starts_at": (now - timedelta(days=1)).isoformat(),
        "ends_at": (now + timedelta(days=30)).isoformat(),
    }
    data.update(overrides)
    return data


class TestCouponCrud:
    def test_create(self, auth_client):
        response = auth_client.post(COUPONS_URL, _payload(), format="json")

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["code"] == "SUMMER"
        assert data["usage_count"] == 0

    def test_duplicate_code_is_conflict(self, auth_client, make_coupon):
        make_coupon(code="SUMMER")

        response = auth_client.post(COUPONS_URL, _payload(), format="json")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_inverted_window_is_validation_error(self, auth_client):
        now = timezone.now()
        response = auth_client.post(
            COUPONS_URL,
            _payload(
                starts_at=now.isoformat(),
                ends_at=(now - timedelta(days=1)).isoformat(),
            ),
            format="json",
        )
        assert response.status_code == 422

    def test_update(self, auth_client, make_coupon):
        coupon = make_coupon()

        response = auth_client.patch(
            f"{COUPONS_URL}/{coupon.id}", {"is_active": False}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["data"]["is_active"] is False

    def test_detail_has_usage_history(
        self, auth_client, make_coupon, coupon_service, placed_order, customer
    ):
        coupon = make_coupon(minimum_purchase=Decimal("0"))
        coupon_service.redeem(
            "SAVE10", placed_order.subtotal, str(customer.id), str(placed_order.id)
        )

        data = auth_client.get(f"{COUPONS_URL}/{coupon.id}").json()["data"]

        assert data["usage_count"] == 1
        assert data["usage_history"][0]["order_number"] == placed_order.order_number
        assert data["usage_history"][0]["user_id"] == str(customer.id)

    def test_delete(self, auth_client, make_coupon):
        coupon = make_coupon()

        response = auth_client.delete(f"{COUPONS_URL}/{coupon.id}")

        assert response.status_code == 200
        assert not Coupon.objects.filter(id=coupon.id).exists()


class TestValidateCoupon:
    def _validate(self, client, code, amount, **extra):
        return client.post(
            f"{COUPONS_URL}/validate",
            {"code": code, "order_amount": amount, **extra},
            format="json",
        )

    def test_discount_capped(self, auth_client, make_coupon):
        make_coupon()

        response = self._validate(auth_client, "SAVE10", "300")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["discount"] == "20.00"
        assert data["final_amount"] == "280.00"
        assert data["coupon"]["code"] == "SAVE10"

    def test_below_minimum_is_bad_request(self, auth_client, make_coupon):
        make_coupon()

        response = self._validate(auth_client, "save10", "40")

        assert response.status_code == 400
        assert "Minimum purchase" in response.json()["error"]["message"]

    def test_unknown_code_is_not_found(self, auth_client):
        response = self._validate(auth_client, "NOPE", "100")
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Coupon not found"

    def test_per_user_limit(
        self, auth_client, make_coupon, coupon_service, placed_order, customer
    ):
        make_coupon(minimum_purchase=Decimal("0"))
        coupon_service.redeem(
            "SAVE10", placed_order.subtotal, str(customer.id), str(placed_order.id)
        )

        response = self._validate(auth_client, "SAVE10", "100", user_id=str(customer.id))

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "You have already used this coupon"

    def test_validation_does_not_consume(self, auth_client, make_coupon):
        coupon = make_coupon()

        self._validate(auth_client, "SAVE10", "100")

        coupon.refresh_from_db()
        assert coupon.usage_count == 0


class TestCouponDatesNeedOffset:
    def test_create_with_naive_ends_at_is_validation_error(self, auth_client):
        response = auth_client.post(
            COUPONS_URL, _payload(ends_at="2026-12-31T23:59:59"), format="json"
        )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"][0]["field"] == "ends_at"
        assert not Coupon.objects.exists()

    def test_update_with_naive_ends_at_is_validation_error(
        self, auth_client, make_coupon
    ):
        coupon = make_coupon()

        response = auth_client.put(
            f"{COUPONS_URL}/{coupon.id}",
            {"ends_at": "2026-12-31T23:59:59"},
            format="json",
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        refreshed = Coupon.objects.get(id=coupon.id)
        assert refreshed.ends_at == coupon.ends_at
