"""Integration tests for order field updates, deletion and look-ups."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.core.exceptions import (
    DependencyConflict,
    NotFound,
    TerminalStateViolation,
)
from modules.delivery.models import DeliverySlot
from modules.orders.constants import OrderStatus
from modules.orders.dtos import UpdateOrderDTO
from modules.orders.exceptions import ChildRecordLocked
from modules.orders.models import Order, OrderItem, OrderStatusLog
from modules.payments.constants import PaymentStatus
from modules.payments.models import PaymentInfo, PaymentMethod
from modules.shipping.constants import ShippingStatus
from modules.shipping.models import Shipment, ShippingAddress

pytestmark = pytest.mark.integration


class TestUpdateOrder:
    def test_updates_fields_without_touching_status(self, order_service, order):
        updated = order_service.update_order(
            order.id,
            UpdateOrderDTO(memo="Leave at the door", shipping_fee=Decimal("500")),
        )
        assert updated.memo == "Leave at the door"
        assert updated.shipping_fee == Decimal("500")
        assert updated.status == OrderStatus.PENDING

    def test_reference_is_validated(self, order_service, order):
        with pytest.raises(NotFound) as exc_info:
            order_service.update_order(
                order.id, UpdateOrderDTO(payment_method_id=uuid4())
            )
        assert exc_info.value.entity_type == "PaymentMethod"

    def test_switches_payment_method(self, order_service, order):
        cod = PaymentMethod.objects.create(name="Cash on delivery", code="COD")
        updated = order_service.update_order(
            order.id, UpdateOrderDTO(payment_method_id=cod.id)
        )
        assert updated.payment_method_id == cod.id

    def test_billing_amount_carried_to_unpaid_payment(self, order_service, order):
        order_service.update_order(
            order.id, UpdateOrderDTO(billing_amount=Decimal("5000"))
        )
        payment = PaymentInfo.objects.get(order_id=order.id)
        assert payment.payment_amount == Decimal("5000")

    def test_billing_amount_change_rejected_once_paid(self, order_service, order):
        PaymentInfo.objects.filter(order_id=order.id).update(
            payment_status=PaymentStatus.PAID
        )
        with pytest.raises(ChildRecordLocked) as exc_info:
            order_service.update_order(
                order.id, UpdateOrderDTO(billing_amount=Decimal("5000"))
            )

        assert exc_info.value.entity_type == "PaymentInfo"
        assert Order.objects.get(id=order.id).billing_amount == Decimal("2000")
        payment = PaymentInfo.objects.get(order_id=order.id)
        assert payment.payment_amount == Decimal("2000")

    def test_delivery_slot_carried_to_preparing_shipment(
        self, order_service, order, delivery_method
    ):
        evening = DeliverySlot.objects.create(
            delivery_method=delivery_method, name="18-20", code="18-20"
        )
        updated = order_service.update_order(
            order.id, UpdateOrderDTO(delivery_slot_id=evening.id)
        )
        assert updated.delivery_slot_id == evening.id
        assert Shipment.objects.get(order_id=order.id).delivery_slot_id == evening.id

    def test_delivery_slot_change_rejected_once_dispatched(
        self, order_service, order, delivery_method, delivery_slot
    ):
        Shipment.objects.filter(order_id=order.id).update(
            shipping_status=ShippingStatus.IN_TRANSIT
        )
        evening = DeliverySlot.objects.create(
            delivery_method=delivery_method, name="18-20", code="18-20"
        )
        with pytest.raises(ChildRecordLocked):
            order_service.update_order(
                order.id, UpdateOrderDTO(delivery_slot_id=evening.id)
            )

        assert Order.objects.get(id=order.id).delivery_slot_id == delivery_slot.id
        assert Shipment.objects.get(order_id=order.id).delivery_slot_id == delivery_slot.id

    def test_canceled_order_cannot_be_edited(self, order_service, order):
        order_service.update_status(order.id, OrderStatus.CANCELED)
        with pytest.raises(TerminalStateViolation):
            order_service.update_order(order.id, UpdateOrderDTO(memo="late edit"))
        assert Order.objects.get(id=order.id).memo == ""


class TestDeleteOrder:
    def test_pending_order_deleted_with_children(self, order_service, order):
        order_service.delete_order(order.id)

        assert not Order.objects.filter(id=order.id).exists()
        assert not OrderItem.objects.filter(order_id=order.id).exists()
        assert not PaymentInfo.objects.filter(order_id=order.id).exists()
        assert not Shipment.objects.filter(order_id=order.id).exists()
        assert not OrderStatusLog.objects.filter(order_id=order.id).exists()

    def test_address_removed_with_order(self, order_service, order):
        address_id = Shipment.objects.get(order_id=order.id).address_id
        order_service.delete_order(order.id)
        assert not ShippingAddress.objects.filter(id=address_id).exists()

    def test_pending_order_with_paid_payment_is_not_deletable(
        self, order_service, order
    ):
        PaymentInfo.objects.filter(order_id=order.id).update(
            payment_status=PaymentStatus.PAID, transaction_id="tx-1"
        )
        with pytest.raises(DependencyConflict) as exc_info:
            order_service.delete_order(order.id)

        assert "PAID" in exc_info.value.reason
        assert PaymentInfo.objects.filter(order_id=order.id).exists()

    def test_pending_order_with_dispatched_shipment_is_not_deletable(
        self, order_service, order
    ):
        Shipment.objects.filter(order_id=order.id).update(
            shipping_status=ShippingStatus.IN_TRANSIT
        )
        with pytest.raises(DependencyConflict) as exc_info:
            order_service.delete_order(order.id)

        assert "IN_TRANSIT" in exc_info.value.reason
        assert Order.objects.filter(id=order.id).exists()

    def test_confirmed_order_without_children_is_not_deletable(
        self, order_service, order
    ):
        order_service.update_status(order.id, OrderStatus.CONFIRMED)
        OrderItem.objects.filter(order_id=order.id).delete()
        PaymentInfo.objects.filter(order_id=order.id).delete()
        Shipment.objects.filter(order_id=order.id).delete()

        with pytest.raises(DependencyConflict) as exc_info:
            order_service.delete_order(order.id)

        assert "CONFIRMED" in exc_info.value.reason
        assert Order.objects.filter(id=order.id).exists()

    def test_unknown_order(self, order_service):
        with pytest.raises(NotFound):
            order_service.delete_order(uuid4())


class TestQueries:
    def test_get_by_order_number(self, order_service, order):
        found = order_service.get_by_order_number(order.order_number)
        assert found.id == order.id

    def test_get_by_unknown_order_number(self, order_service):
        with pytest.raises(NotFound):
            order_service.get_by_order_number("ORD000000000000")

    def test_list_orders_filters(self, order_service, order, customer):
        assert [o.id for o in order_service.list_orders({"customer_id": customer.id})] == [
            order.id
        ]
        assert order_service.list_orders({"status": OrderStatus.CANCELED}) == []

    def test_status_logs_of_unknown_order(self, order_service):
        with pytest.raises(NotFound):
            order_service.list_status_logs(uuid4())
