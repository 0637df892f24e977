import pytest

from modules.banners.models import Banner

pytestmark = pytest.mark.integration

BANNERS_URL = "/api/v1/admin/banners"


@pytest.fixture()
def payload():
    return {
        "title": "Flash sale",
        "image_url": "https://cdn.example.com/flash.png",
        "link_type": "product",
        "link_value": "wireless-earbuds",
        "banner_type": "flash_sale",
        "starts_at": "2026-06-01T00:00:00Z",
        "ends_at": "2026-06-02T00:00:00Z",
    }


class TestBannersApi:
    def test_crud(self, auth_client, payload):
        created = auth_client.post(BANNERS_URL, payload, format="json")
        assert created.status_code == 201
        banner_id = created.json()["data"]["id"]

        listed = auth_client.get(BANNERS_URL).json()["data"]
        assert [row["id"] for row in listed] == [banner_id]

        updated = auth_client.patch(
            f"{BANNERS_URL}/{banner_id}", {"is_active": False}, format="json"
        )
        assert updated.json()["data"]["is_active"] is False

        deleted = auth_client.delete(f"{BANNERS_URL}/{banner_id}")
        assert deleted.json()["data"] == {"message": "Banner deleted"}
        assert not Banner.objects.exists()

    def test_inverted_window_on_update(self, auth_client, payload):
        created = auth_client.post(BANNERS_URL, payload, format="json")
        banner_id = created.json()["data"]["id"]

        response = auth_client.patch(
            f"{BANNERS_URL}/{banner_id}",
            {"ends_at": "2026-05-01T00:00:00Z"},
            format="json",
        )

        assert response.status_code == 400

    def test_bad_link_type(self, auth_client, payload):
        payload["link_type"] = "deeplink"
        response = auth_client.post(BANNERS_URL, payload, format="json")
        assert response.status_code == 422

    def test_unknown_banner(self, auth_client):
        response = auth_client.delete(f"{BANNERS_URL}/not-a-uuid")
        assert response.status_code == 404

    def test_create_with_naive_date_is_validation_error(self, auth_client, payload):
        payload["starts_at"] = "2026-06-01T00:00:00"

        response = auth_client.post(BANNERS_URL, payload, format="json")

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"][0]["field"] == "starts_at"
        assert not Banner.objects.exists()

    def test_update_with_naive_date_is_validation_error(self, auth_client, payload):
        created = auth_client.post(BANNERS_URL, payload, format="json")
        banner_id = created.json()["data"]["id"]

        response = auth_client.put(
            f"{BANNERS_URL}/{banner_id}",
            {"ends_at": "2026-06-03T00:00:00"},
            format="json",
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
