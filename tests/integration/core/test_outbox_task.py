"""Outbox relay: pending rows are handed to the in-process bus."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from modules.core.models import EventStatus, OutboxEvent
from modules.core.tasks import publish_outbox_events
from modules.orders.handlers import order_created_handler

pytestmark = pytest.mark.integration


def test_pending_rows_are_published(order):
    with patch.object(order_created_handler, "handle") as handle:
        result = publish_outbox_events()

    assert result == {"published": 1, "failed": 0}
    row = OutboxEvent.objects.get(event_type="OrderCreated")
    assert row.status == EventStatus.PUBLISHED
    assert row.processed_at is not None

    event = handle.call_args.args[0]
    assert event.order_number == order.order_number
    assert str(event.aggregate_id) == str(order.id)


def test_handler_error_marks_row_failed(order):
    with patch.object(
        order_created_handler, "handle", side_effect=RuntimeError("boom")
    ):
        result = publish_outbox_events()

    assert result == {"published": 0, "failed": 1}
    row = OutboxEvent.objects.get(event_type="OrderCreated")
    assert row.status == EventStatus.FAILED
    assert "boom" in row.error_message


def test_published_rows_are_not_sent_twice(order):
    publish_outbox_events()
    assert publish_outbox_events() == {"published": 0, "failed": 0}


def test_status_change_is_relayed(order, order_service):
    order_service.update_status(order.id, "CONFIRMED")
    result = publish_outbox_events()

    assert result["published"] == 2
    assert not OutboxEvent.objects.filter(status=EventStatus.PENDING).exists()


def test_failed_row_is_retried(order):
    with patch.object(order_created_handler, "handle", side_effect=RuntimeError("boom")):
        publish_outbox_events()

    assert publish_outbox_events() == {"published": 1, "failed": 0}
    row = OutboxEvent.objects.get(event_type="OrderCreated")
    assert row.status == EventStatus.PUBLISHED
    assert row.retry_count == 1


def test_exhausted_row_is_left_alone(order, settings):
    settings.OUTBOX_MAX_RETRIES = 1
    with patch.object(order_created_handler, "handle", side_effect=RuntimeError("boom")):
        publish_outbox_events()

    assert publish_outbox_events() == {"published": 0, "failed": 0}
    assert OutboxEvent.objects.get(event_type="OrderCreated").status == EventStatus.FAILED
