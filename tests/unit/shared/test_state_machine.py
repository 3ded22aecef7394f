"""Unit tests for the status graphs of orders, payments and shipments."""

from __future__ import annotations

import pytest

from modules.orders.constants import ORDER_STATE_MACHINE, OrderStatus
from modules.payments.constants import PAYMENT_STATE_MACHINE, PaymentStatus
from modules.shipping.constants import SHIPMENT_STATE_MACHINE, ShippingStatus
from shared.domain.state_machine import Rejection, StateMachine

pytestmark = pytest.mark.unit


class TestStateMachine:
    def test_accepted_transition_returns_new_state(self):
        machine = StateMachine({"A": {"B"}, "B": set()})
        result = machine.transition("A", "B")
        assert result.accepted
        assert result.state == "B"
        assert result.rejection is None

    def test_unknown_edge_is_not_allowed(self):
        machine = StateMachine({"A": {"B"}, "B": {"C"}, "C": set()})
        result = machine.transition("A", "C")
        assert not result.accepted
        assert result.rejection == Rejection.NOT_ALLOWED
        assert result.state is None

    def test_terminal_states_default_to_states_without_edges(self):
        machine = StateMachine({"A": {"B"}, "B": set()})
        assert machine.terminal_states == frozenset({"B"})

    def test_terminal_current_rejected_before_target_lookup(self):
        machine = StateMachine({"A": {"B"}, "B": {"A"}}, terminal_states={"B"})
        result = machine.transition("B", "A")
        assert result.rejection == Rejection.TERMINAL


class TestOrderGraph:
    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PENDING, OrderStatus.CONFIRMED),
            (OrderStatus.PENDING, OrderStatus.CANCELED),
            (OrderStatus.CONFIRMED, OrderStatus.SHIPPED),
            (OrderStatus.CONFIRMED, OrderStatus.CANCELED),
            (OrderStatus.SHIPPED, OrderStatus.COMPLETED),
        ],
    )
    def test_valid_edges(self, current, target):
        assert ORDER_STATE_MACHINE.can_transition(current, target)

    def test_pending_cannot_skip_to_shipped(self):
        result = ORDER_STATE_MACHINE.transition(
            OrderStatus.PENDING, OrderStatus.SHIPPED
        )
        assert result.rejection == Rejection.NOT_ALLOWED

    def test_shipped_cannot_be_canceled(self):
        assert not ORDER_STATE_MACHINE.can_transition(
            OrderStatus.SHIPPED, OrderStatus.CANCELED
        )

    @pytest.mark.parametrize("terminal", [OrderStatus.COMPLETED, OrderStatus.CANCELED])
    def test_terminal_states_reject_everything(self, terminal):
        for target in OrderStatus.values:
            result = ORDER_STATE_MACHINE.transition(terminal, target)
            assert result.rejection == Rejection.TERMINAL


class TestPaymentGraph:
    def test_unpaid_can_be_authorized_or_paid(self):
        assert PAYMENT_STATE_MACHINE.allowed_targets(PaymentStatus.UNPAID) == {
            PaymentStatus.AUTHORIZED,
            PaymentStatus.PAID,
        }

    def test_authorized_cannot_be_refunded(self):
        assert not PAYMENT_STATE_MACHINE.can_transition(
            PaymentStatus.AUTHORIZED, PaymentStatus.REFUNDED
        )

    def test_refunded_is_terminal(self):
        assert PAYMENT_STATE_MACHINE.is_terminal(PaymentStatus.REFUNDED)
        assert not PAYMENT_STATE_MACHINE.is_terminal(PaymentStatus.PAID)


class TestShipmentGraph:
    def test_preparing_goes_to_in_transit_only(self):
        assert SHIPMENT_STATE_MACHINE.allowed_targets(ShippingStatus.PREPARING) == {
            ShippingStatus.IN_TRANSIT
        }

    def test_delivered_is_terminal(self):
        result = SHIPMENT_STATE_MACHINE.transition(
            ShippingStatus.DELIVERED, ShippingStatus.RETURNED
        )
        assert result.rejection == Rejection.TERMINAL

    def test_returned_has_no_inbound_edge(self):
        for state in ShippingStatus.values:
            assert ShippingStatus.RETURNED not in SHIPMENT_STATE_MACHINE.allowed_targets(
                state
            )
