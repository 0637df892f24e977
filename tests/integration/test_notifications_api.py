import pytest

from modules.notifications.constants import NotificationType
from modules.notifications.models import Notification

pytestmark = pytest.mark.integration

NOTIFICATIONS_URL = "/api/v1/admin/notifications"


class TestSendNotification:
    def test_send_to_user(self, auth_client, customer):
        response = auth_client.post(
            f"{NOTIFICATIONS_URL}/send",
            {
                "title": "Back in stock",
                "body": "Your item is back",
                "user_ids": [str(customer.id)],
            },
            format="json",
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["message"] == "Notification sent"
        assert data["recipients"] == 1
        assert data["notification"]["user_id"] == str(customer.id)

    def test_no_valid_devices(self, auth_client, guest_customer):
        response = auth_client.post(
            f"{NOTIFICATIONS_URL}/send",
            {"title": "Hi", "body": "Hello", "user_ids": [str(guest_customer.id)]},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "No valid devices found for specified users"
        )

    def test_title_required(self, auth_client):
        response = auth_client.post(
            f"{NOTIFICATIONS_URL}/send", {"body": "Hello"}, format="json"
        )
        assert response.status_code == 422

    def test_unknown_segment(self, auth_client):
        response = auth_client.post(
            f"{NOTIFICATIONS_URL}/send",
            {"title": "Hi", "body": "Hello", "segment": "vip"},
            format="json",
        )
        assert response.status_code == 422


class TestListNotifications:
    def test_filter_by_type(self, auth_client, customer):
        Notification.objects.create(title="A", body="a", customer=customer)
        Notification.objects.create(
            title="B",
            body="b",
            customer=customer,
            notification_type=NotificationType.ORDER,
        )

        data = auth_client.get(f"{NOTIFICATIONS_URL}?type=order").json()["data"]

        assert [row["title"] for row in data] == ["B"]
