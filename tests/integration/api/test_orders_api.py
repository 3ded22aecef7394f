"""HTTP tests for the order endpoints."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.models import Order

pytestmark = pytest.mark.integration

ORDERS_URL = "/api/v1/orders/"


class TestOrderCreation:
    def test_create_returns_full_order(self, auth_client, order_payload):
        response = auth_client.post(ORDERS_URL, order_payload, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == OrderStatus.PENDING
        assert body["order_number"].startswith("ORD")
        assert body["billing_amount"] == "2000.00"
        assert len(body["items"]) == 1
        assert body["items"][0]["product_code"] == "TEA-001"
        assert body["payments"][0]["payment_status"] == "UNPAID"
        assert body["shipments"][0]["shipping_status"] == "PREPARING"
        assert [log["status"] for log in body["status_logs"]] == [OrderStatus.PENDING]

    def test_empty_items_rejected(self, auth_client, order_payload):
        order_payload["items"] = []
        response = auth_client.post(ORDERS_URL, order_payload, format="json")

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"
        assert Order.objects.count() == 0

    def test_unknown_customer_is_404(self, auth_client, order_payload):
        order_payload["customer_id"] = str(uuid4())
        response = auth_client.post(ORDERS_URL, order_payload, format="json")

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "not_found"
        assert Order.objects.count() == 0

    def test_requires_authentication(self, api_client, order_payload):
        response = api_client.post(ORDERS_URL, order_payload, format="json")
        assert response.status_code == 401


class TestOrderQueries:
    def test_list_is_paginated(self, auth_client, order):
        response = auth_client.get(ORDERS_URL)

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["results"][0]["order_number"] == order.order_number
        assert body["results"][0]["customer_name"] == "Aiko Tanaka"

    def test_filter_by_status(self, auth_client, order):
        response = auth_client.get(ORDERS_URL, {"status": OrderStatus.CANCELED})
        assert response.json()["count"] == 0

    def test_retrieve_unknown_is_404(self, auth_client):
        response = auth_client.get(f"{ORDERS_URL}{uuid4()}/")
        assert response.status_code == 404

    def test_retrieve_malformed_id_is_404(self, auth_client):
        response = auth_client.get(f"{ORDERS_URL}not-a-uuid/")
        assert response.status_code == 404

    def test_by_number(self, auth_client, order):
        response = auth_client.get(f"{ORDERS_URL}by-number/{order.order_number}/")

        assert response.status_code == 200
        assert response.json()["id"] == str(order.id)


class TestOrderStatusEndpoint:
    def test_valid_transition(self, auth_client, order):
        url = f"{ORDERS_URL}{order.id}/status/"
        response = auth_client.post(url, {"status": "CONFIRMED"}, format="json")

        assert response.status_code == 200
        assert response.json()["status"] == OrderStatus.CONFIRMED

        logs = auth_client.get(f"{ORDERS_URL}{order.id}/status-logs/").json()
        assert [log["status"] for log in logs] == ["CONFIRMED", "PENDING"]

    def test_invalid_transition_is_400(self, auth_client, order):
        url = f"{ORDERS_URL}{order.id}/status/"
        response = auth_client.post(url, {"status": "SHIPPED"}, format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["type"] == "client_error"
        assert body["errors"][0]["code"] == "invalid_transition"

    def test_terminal_order_is_400(self, auth_client, order):
        url = f"{ORDERS_URL}{order.id}/status/"
        auth_client.post(url, {"status": "CANCELED"}, format="json")
        response = auth_client.post(url, {"status": "CONFIRMED"}, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "terminal_state"

    def test_unknown_status_value_is_400(self, auth_client, order):
        url = f"{ORDERS_URL}{order.id}/status/"
        response = auth_client.post(url, {"status": "LOST"}, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "status"


class TestOrderMaintenance:
    def test_patch_updates_memo(self, auth_client, order):
        response = auth_client.patch(
            f"{ORDERS_URL}{order.id}/", {"memo": "Leave at door"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["memo"] == "Leave at door"

    def test_delete_pending_order(self, auth_client, order):
        response = auth_client.delete(f"{ORDERS_URL}{order.id}/")
        assert response.status_code == 204
        assert not Order.objects.filter(id=order.id).exists()

    def test_delete_confirmed_order_is_409(self, auth_client, order):
        auth_client.post(
            f"{ORDERS_URL}{order.id}/status/", {"status": "CONFIRMED"}, format="json"
        )
        response = auth_client.delete(f"{ORDERS_URL}{order.id}/")

        assert response.status_code == 409
        assert response.json()["errors"][0]["code"] == "dependency_conflict"
