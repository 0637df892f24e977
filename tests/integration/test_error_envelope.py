"""Integration tests for the standard response envelopes."""

import pytest

pytestmark = pytest.mark.integration


class TestErrorEnvelope:
    def test_unknown_endpoint(self, client):
        response = client.get("/api/v1/admin/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": {"code": "NOT_FOUND", "message": "Endpoint not found"},
        }

    def test_unknown_resource(self, auth_client):
        response = auth_client.get(
            "/api/v1/admin/orders/0190c0de-0000-7000-8000-000000000000"
        )
        assert response.status_code == 404
        assert response.json()["error"] == {
            "code": "NOT_FOUND",
            "message": "Order not found",
        }

    def test_malformed_id_is_not_found(self, auth_client):
        response = auth_client.get("/api/v1/admin/products/not-a-uuid")
        assert response.status_code == 404

    def test_validation_error_lists_fields(self, auth_client):
        response = auth_client.post(
            "/api/v1/admin/categories", {"name": ""}, format="json"
        )
        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "VALIDATION_ERROR"
        fields = {d["field"] for d in body["error"]["details"]}
        assert {"name", "slug"} <= fields

    def test_malformed_json(self, auth_client):
        response = auth_client.post(
            "/api/v1/admin/categories", data="{", content_type="application/json"
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"

    def test_method_not_allowed(self, auth_client):
        response = auth_client.delete("/api/v1/admin/dashboard/stats")
        assert response.status_code == 405
        assert response.json()["error"]["code"] == "METHOD_NOT_ALLOWED"


class TestPagination:
    @pytest.fixture()
    def many_products(self, make_product):
        return [make_product() for _ in range(25)]

    def test_default_page(self, auth_client, many_products):
        response = auth_client.get("/api/v1/admin/products")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert len(body["data"]) == 20
        assert body["meta"] == {"page": 1, "limit": 20, "total": 25, "total_pages": 2}

    def test_last_page(self, auth_client, many_products):
        response = auth_client.get("/api/v1/admin/products?page=2&limit=20")
        body = response.json()
        assert len(body["data"]) == 5
        assert body["meta"]["page"] == 2

    def test_page_past_the_end_is_empty(self, auth_client, many_products):
        response = auth_client.get("/api/v1/admin/products?page=9")
        assert response.status_code == 200
        assert response.json()["data"] == []

    @pytest.mark.parametrize("query", ["page=0", "limit=0", "limit=101", "page=abc"])
    def test_invalid_params(self, auth_client, query):
        response = auth_client.get(f"/api/v1/admin/products?{query}")
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_empty_list(self, auth_client):
        body = auth_client.get("/api/v1/admin/orders").json()
        assert body["data"] == []
        assert body["meta"]["total"] == 0
        assert body["meta"]["total_pages"] == 0
