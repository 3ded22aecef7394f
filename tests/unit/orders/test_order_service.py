"""Unit tests for OrderService with stubbed repositories."""

from __future__ import annotations

from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from modules.core.exceptions import (
    InvalidTransition,
    NotFound,
    TerminalStateViolation,
)
from modules.orders.constants import OrderStatus
from modules.orders.events import OrderStatusChanged
from modules.orders.models import Order
from modules.orders.services import OrderService

pytestmark = pytest.mark.unit


@pytest.fixture()
def repos():
    names = [
        "order_repository",
        "customer_repository",
        "site_repository",
        "shop_repository",
        "payment_method_repository",
        "delivery_method_repository",
        "delivery_slot_repository",
        "product_repository",
        "address_repository",
        "payment_repository",
        "shipment_repository",
    ]
    return {name: MagicMock(name=name) for name in names}


@pytest.fixture()
def service(repos):
    return OrderService(**repos)


class TestCreateOrderReferenceValidation:
    def test_missing_customer_fails_before_any_write(self, service, repos, make_order_dto):
        repos["customer_repository"].get_by_id.return_value = None

        with pytest.raises(NotFound) as exc_info:
            service.create_order(make_order_dto())

        assert exc_info.value.entity_type == "Customer"
        repos["address_repository"].save.assert_not_called()
        repos["order_repository"].save.assert_not_called()
        repos["payment_repository"].save.assert_not_called()

    def test_missing_delivery_slot_is_reported(self, service, repos, make_order_dto):
        repos["delivery_slot_repository"].get_by_id.return_value = None

        with pytest.raises(NotFound) as exc_info:
            service.create_order(make_order_dto())

        assert exc_info.value.entity_type == "DeliverySlot"
        repos["order_repository"].save.assert_not_called()


class TestUpdateStatus:
    def test_unknown_order_raises_not_found(self, service, repos):
        repos["order_repository"].get_for_update.return_value = None
        with pytest.raises(NotFound):
            service.update_status(uuid4(), OrderStatus.CONFIRMED)

    @pytest.mark.parametrize("terminal", [OrderStatus.COMPLETED, OrderStatus.CANCELED])
    def test_terminal_order_is_frozen(self, service, repos, terminal):
        order = Order(status=terminal)
        repos["order_repository"].get_for_update.return_value = order

        with pytest.raises(TerminalStateViolation):
            service.update_status(order.id, OrderStatus.CONFIRMED)

        assert order.status == terminal
        repos["order_repository"].save.assert_not_called()
        repos["order_repository"].add_status_log.assert_not_called()

    def test_skipping_confirmation_is_rejected(self, service, repos):
        order = Order(status=OrderStatus.PENDING)
        repos["order_repository"].get_for_update.return_value = order

        with pytest.raises(InvalidTransition):
            service.update_status(order.id, OrderStatus.SHIPPED)

        assert order.status == OrderStatus.PENDING
        repos["order_repository"].add_status_log.assert_not_called()

    def test_valid_transition_writes_status_log_and_event(self, service, repos):
        order = Order(status=OrderStatus.PENDING)
        order_repo = repos["order_repository"]
        order_repo.get_for_update.return_value = order
        order_repo.get_by_id.return_value = order

        result = service.update_status(order.id, OrderStatus.CONFIRMED)

        assert result is order
        assert order.status == OrderStatus.CONFIRMED
        order_repo.save.assert_called_once_with(order)
        order_repo.add_status_log.assert_called_once_with(order, OrderStatus.CONFIRMED)
        (event,) = order.domain_events
        assert isinstance(event, OrderStatusChanged)
        assert event.old_status == OrderStatus.PENDING
        assert event.new_status == OrderStatus.CONFIRMED


class TestDeletionPolicy:
    def test_only_pending_orders_are_deletable(self, service):
        assert service.can_delete(Order(status=OrderStatus.PENDING)).ok
        for status in (
            OrderStatus.CONFIRMED,
            OrderStatus.SHIPPED,
            OrderStatus.COMPLETED,
            OrderStatus.CANCELED,
        ):
            result = service.can_delete(Order(status=status))
            assert not result.ok
            assert status in result.reason

    def test_update_of_terminal_order_rejected(self, service, repos):
        from modules.orders.dtos import UpdateOrderDTO

        order = Order(status=OrderStatus.COMPLETED, memo="before")
        repos["order_repository"].get_for_update.return_value = order

        with pytest.raises(TerminalStateViolation):
            service.update_order(order.id, UpdateOrderDTO(memo="after"))

        assert order.memo == "before"
