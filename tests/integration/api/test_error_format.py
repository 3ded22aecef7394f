"""Every error response shares the same body."""

import pytest

pytestmark = pytest.mark.integration


def _assert_standard_body(data, error_type):
    assert data["type"] == error_type
    assert isinstance(data["errors"], list)
    assert data["errors"]
    assert {"code", "detail", "attr"} <= set(data["errors"][0])


class TestStandardizedErrors:
    def test_auth_error(self, api_client):
        response = api_client.get("/api/v1/customers/")
        assert response.status_code == 401
        _assert_standard_body(response.json(), "client_error")

    def test_malformed_json(self, auth_client):
        response = auth_client.post(
            "/api/v1/customers/", data="{", content_type="application/json"
        )
        assert response.status_code == 400
        _assert_standard_body(response.json(), "validation_error")

    def test_field_errors_carry_attr(self, auth_client):
        response = auth_client.post(
            "/api/v1/customers/", {"name": "X", "email": "nope"}, format="json"
        )
        assert response.status_code == 400
        attrs = {error["attr"] for error in response.json()["errors"]}
        assert "email" in attrs

    def test_not_found(self, auth_client):
        response = auth_client.get("/api/v1/shipments/by-tracking/UNKNOWN/")
        assert response.status_code == 404
        _assert_standard_body(response.json(), "client_error")
        assert response.json()["errors"][0]["attr"] is None
