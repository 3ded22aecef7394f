"""HTTP tests for payment records, shipments and master data guards."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration


class TestPaymentInfoEndpoints:
    def test_pay_then_refund(self, auth_client, order):
        payment = order.payments.get()
        base = f"/api/v1/payment-info/{payment.id}/"

        paid = auth_client.post(
            f"{base}status/", {"status": "PAID", "transaction_id": "tx-9"}, format="json"
        )
        assert paid.status_code == 200
        assert paid.json()["payment_date"] is not None

        refunded = auth_client.post(f"{base}refund/")
        assert refunded.status_code == 200
        assert refunded.json()["payment_status"] == "REFUNDED"

        found = auth_client.get("/api/v1/payment-info/by-transaction/tx-9/")
        assert found.json()["id"] == str(payment.id)

    def test_refund_of_unpaid_payment_is_400(self, auth_client, order):
        payment = order.payments.get()
        response = auth_client.post(f"/api/v1/payment-info/{payment.id}/refund/")

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "invalid_state_for_refund"

    def test_second_payment_for_order_is_409(self, auth_client, order):
        response = auth_client.post(
            "/api/v1/payment-info/",
            {
                "order_id": str(order.id),
                "site_id": str(order.site_id),
                "payment_amount": "2000.00",
            },
            format="json",
        )
        assert response.status_code == 409


class TestShipmentEndpoints:
    def test_dispatch_with_tracking(self, auth_client, order):
        shipment = order.shipments.get()
        response = auth_client.post(
            f"/api/v1/shipments/{shipment.id}/status/",
            {"status": "IN_TRANSIT", "tracking_number": "JP42"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["tracking_number"] == "JP42"
        assert response.json()["shipped_at"] is not None

        found = auth_client.get("/api/v1/shipments/by-tracking/JP42/")
        assert found.json()["id"] == str(shipment.id)

    def test_prefecture_counts(self, auth_client, order):
        response = auth_client.get("/api/v1/shipping-addresses/prefectures/")
        assert response.json() == [{"prefecture": "Tokyo", "count": 1}]


class TestMasterDataGuards:
    def test_shop_in_use_is_409(self, auth_client, order):
        response = auth_client.delete(f"/api/v1/shops/{order.shop_id}/")
        assert response.status_code == 409

    def test_duplicate_site_code_is_409(self, auth_client, site):
        response = auth_client.post(
            "/api/v1/sites/", {"code": site.code, "name": "Copy"}, format="json"
        )
        assert response.status_code == 409
        assert response.json()["errors"][0]["code"] == "duplicate_code"
