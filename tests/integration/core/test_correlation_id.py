"""Correlation ids are echoed back on every response."""

from __future__ import annotations

import logging
from uuid import UUID

import pytest

pytestmark = pytest.mark.integration


def test_incoming_request_id_is_echoed(api_client):
    response = api_client.get("/health", HTTP_X_REQUEST_ID="req-123")
    assert response["X-Request-ID"] == "req-123"


def test_request_id_generated_when_missing(api_client):
    response = api_client.get("/health")
    UUID(response["X-Request-ID"])


def test_error_responses_carry_request_id(auth_client):
    response = auth_client.get(
        "/api/v1/orders/by-number/ORD000000000000/", HTTP_X_REQUEST_ID="req-404"
    )
    assert response.status_code == 404
    assert response["X-Request-ID"] == "req-404"


def test_client_default_header_is_used(api_client_with_correlation):
    client, cid = api_client_with_correlation
    assert client.get("/health")["X-Request-ID"] == cid


def test_correlation_id_bound_into_log_records(api_client, caplog):
    with caplog.at_level(logging.INFO):
        api_client.get("/health", HTTP_X_REQUEST_ID="log-correlation-789")
    assert any(
        "log-correlation-789" in record.getMessage() for record in caplog.records
    )
