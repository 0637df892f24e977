"""Integration tests for the admin order endpoints."""

import pytest

from modules.notifications.models import Notification
from modules.orders.constants import OrderStatus
from modules.orders.dtos import PlaceOrderDTO, PlaceOrderItemDTO

pytestmark = pytest.mark.integration

ORDERS_URL = "/api/v1/admin/orders"


def _status_url(order):
    return f"{ORDERS_URL}/{order.id}/status"


class TestListOrders:
    def test_list_newest_first(self, auth_client, order_service, customer, product):
        first = order_service.place_order(
            PlaceOrderDTO(
                customer_id=customer.id,
                items=[PlaceOrderItemDTO(product_id=product.id, quantity=1)],
            )
        )
        second = order_service.place_order(
            PlaceOrderDTO(items=[PlaceOrderItemDTO(product_id=product.id, quantity=1)])
        )

        data = auth_client.get(ORDERS_URL).json()["data"]

        assert [row["id"] for row in data] == [str(second.id), str(first.id)]
        assert data[0]["user"] is None
        assert data[1]["user"]["email"] == customer.email

    def test_filter_by_status(self, auth_client, order_service, placed_order):
        response = auth_client.get(f"{ORDERS_URL}?status=shipped")
        assert response.json()["data"] == []

        response = auth_client.get(f"{ORDERS_URL}?status=placed")
        assert len(response.json()["data"]) == 1

    def test_unknown_status_filter_is_validation_error(self, auth_client):
        response = auth_client.get(f"{ORDERS_URL}?status=lost")
        assert response.status_code == 422

    def test_search_by_order_number(self, auth_client, placed_order):
        fragment = placed_order.order_number[-6:].lower()
        data = auth_client.get(f"{ORDERS_URL}?search={fragment}").json()["data"]
        assert [row["order_number"] for row in data] == [placed_order.order_number]


class TestOrderDetail:
    def test_includes_items_and_history(self, auth_client, placed_order):
        response = auth_client.get(f"{ORDERS_URL}/{placed_order.id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["order_number"] == placed_order.order_number
        assert data["total_amount"] == "50.00"
        assert data["coupon_code"] is None
        assert data["items"][0]["product_name"] == "Wireless Earbuds"
        assert data["items"][0]["unit_price"] == "25.00"
        assert data["status_history"][0]["new_status"] == "placed"
        assert data["status_history"][0]["notes"] == "Order placed"


class TestUpdateStatus:
    def test_valid_transition(
        self, auth_client, admin_user, placed_order, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            response = auth_client.put(
                _status_url(placed_order),
                {"status": "shipped", "notes": "Tracking ABC123"},
                format="json",
            )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "shipped"
        assert data["shipped_at"] is not None
        assert data["status_history"][-1]["changed_by"] == str(admin_user.id)
        assert data["status_history"][-1]["notes"] == "Tracking ABC123"
        assert Notification.objects.filter(customer=placed_order.customer).count() == 1

    def test_invalid_transition_is_bad_request(self, auth_client, placed_order):
        auth_client.put(_status_url(placed_order), {"status": "delivered"}, format="json")

        response = auth_client.put(
            _status_url(placed_order), {"status": "cancelled"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"] == {
            "code": "BAD_REQUEST",
            "message": "Cannot transition order from delivered to cancelled",
        }
        placed_order.refresh_from_db()
        assert placed_order.status == OrderStatus.DELIVERED

    def test_unknown_status_is_validation_error(self, auth_client, placed_order):
        response = auth_client.put(
            _status_url(placed_order), {"status": "teleported"}, format="json"
        )
        assert response.status_code == 422
        assert response.json()["error"]["details"][0]["field"] == "status"

    def test_unknown_order(self, auth_client):
        response = auth_client.put(
            f"{ORDERS_URL}/0190c0de-0000-7000-8000-000000000000/status",
            {"status": "confirmed"},
            format="json",
        )
        assert response.status_code == 404

    def test_requires_token(self, api_client, placed_order):
        response = api_client.put(
            _status_url(placed_order), {"status": "confirmed"}, format="json"
        )
        assert response.status_code == 401

    def test_orders_cannot_be_created_or_deleted(self, auth_client, placed_order):
        assert auth_client.post(ORDERS_URL, {}, format="json").status_code == 405
        assert auth_client.delete(f"{ORDERS_URL}/{placed_order.id}").status_code == 405
