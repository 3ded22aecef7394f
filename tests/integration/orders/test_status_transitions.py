"""Integration tests for order status transitions and the status log."""

from __future__ import annotations

import pytest

from modules.core.exceptions import (
    InvalidTransition,
    NotFound,
    TerminalStateViolation,
)
from modules.core.models import OutboxEvent
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderStatusLog

pytestmark = pytest.mark.integration


def _log_count(order) -> int:
    return OrderStatusLog.objects.filter(order_id=order.id).count()


class TestStatusLogMirroring:
    @pytest.mark.parametrize(
        "path",
        [
            [OrderStatus.CONFIRMED],
            [OrderStatus.CANCELED],
            [OrderStatus.CONFIRMED, OrderStatus.SHIPPED],
            [OrderStatus.CONFIRMED, OrderStatus.SHIPPED, OrderStatus.COMPLETED],
            [OrderStatus.CONFIRMED, OrderStatus.CANCELED],
        ],
    )
    def test_each_transition_appends_one_log(self, order_service, order, path):
        for status in path:
            before = _log_count(order)
            updated = order_service.update_status(order.id, status)

            assert updated.status == status
            assert _log_count(order) == before + 1
            last = order_service.list_status_logs(order.id)[0]
            assert last.status == status

    def test_log_history_is_newest_first(self, order_service, order):
        order_service.update_status(order.id, OrderStatus.CONFIRMED)
        order_service.update_status(order.id, OrderStatus.SHIPPED)

        statuses = [log.status for log in order_service.list_status_logs(order.id)]
        assert statuses == [
            OrderStatus.SHIPPED,
            OrderStatus.CONFIRMED,
            OrderStatus.PENDING,
        ]

    def test_status_change_event_in_outbox(self, order_service, order):
        order_service.update_status(order.id, OrderStatus.CONFIRMED)
        row = OutboxEvent.objects.get(
            aggregate_id=str(order.id), event_type="OrderStatusChanged"
        )
        assert row.payload["old_status"] == OrderStatus.PENDING
        assert row.payload["new_status"] == OrderStatus.CONFIRMED


class TestRejectedTransitions:
    def test_pending_to_shipped_rejected(self, order_service, order):
        before = _log_count(order)
        with pytest.raises(InvalidTransition):
            order_service.update_status(order.id, OrderStatus.SHIPPED)

        assert Order.objects.get(id=order.id).status == OrderStatus.PENDING
        assert _log_count(order) == before

    def test_unknown_order(self, order_service):
        with pytest.raises(NotFound):
            order_service.update_status(
                "00000000-0000-0000-0000-000000000000", OrderStatus.CONFIRMED
            )

    def test_malformed_id_is_not_found(self, order_service):
        with pytest.raises(NotFound):
            order_service.update_status("not-a-uuid", OrderStatus.CONFIRMED)


class TestTerminalImmutability:
    @pytest.fixture()
    def completed_order(self, order_service, order):
        for status in (OrderStatus.CONFIRMED, OrderStatus.SHIPPED, OrderStatus.COMPLETED):
            order_service.update_status(order.id, status)
        return order

    @pytest.fixture()
    def canceled_order(self, order_service, order):
        order_service.update_status(order.id, OrderStatus.CANCELED)
        return order

    @pytest.mark.parametrize("target", OrderStatus.values)
    def test_completed_order_rejects_every_status(
        self, order_service, completed_order, target
    ):
        before = _log_count(completed_order)
        with pytest.raises(TerminalStateViolation):
            order_service.update_status(completed_order.id, target)
        assert Order.objects.get(id=completed_order.id).status == OrderStatus.COMPLETED
        assert _log_count(completed_order) == before

    @pytest.mark.parametrize("target", OrderStatus.values)
    def test_canceled_order_rejects_every_status(
        self, order_service, canceled_order, target
    ):
        with pytest.raises(TerminalStateViolation):
            order_service.update_status(canceled_order.id, target)
        assert Order.objects.get(id=canceled_order.id).status == OrderStatus.CANCELED
