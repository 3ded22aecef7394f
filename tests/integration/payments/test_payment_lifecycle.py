"""Integration tests for payment status changes, refunds and guards."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.core.exceptions import (
    DependencyConflict,
    NotFound,
    TerminalStateViolation,
    UniquenessConflict,
)
from modules.core.models import OutboxEvent
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.payments.constants import PaymentStatus
from modules.payments.dtos import (
    CreatePaymentInfoDTO,
    CreatePaymentMethodDTO,
    UpdatePaymentInfoDTO,
)
from modules.payments.exceptions import InvalidStateForRefund, PaymentAlreadyExists
from modules.payments.models import PaymentInfo
from modules.payments.repositories.django_repository import (
    PaymentInfoDjangoRepository,
    PaymentMethodDjangoRepository,
)
from modules.payments.services import PaymentInfoService, PaymentMethodService
from modules.stores.repositories.django_repository import SiteDjangoRepository

pytestmark = pytest.mark.integration


@pytest.fixture()
def payment_service():
    return PaymentInfoService(
        repository=PaymentInfoDjangoRepository(),
        order_repository=OrderDjangoRepository(),
        site_repository=SiteDjangoRepository(),
    )


@pytest.fixture()
def method_service():
    return PaymentMethodService(repository=PaymentMethodDjangoRepository())


@pytest.fixture()
def payment(order):
    return order.payments.get()


class TestRefundScenario:
    def test_refund_of_authorized_payment_rejected(self, payment_service, payment):
        payment_service.update_status(payment.id, PaymentStatus.AUTHORIZED)

        with pytest.raises(InvalidStateForRefund):
            payment_service.refund(payment.id)

        payment.refresh_from_db()
        assert payment.payment_status == PaymentStatus.AUTHORIZED

    def test_refund_of_paid_payment_freezes_it(self, payment_service, payment):
        payment_service.update_status(payment.id, PaymentStatus.PAID, "tx-1")

        refunded = payment_service.refund(payment.id)
        assert refunded.payment_status == PaymentStatus.REFUNDED

        for target in PaymentStatus.values:
            with pytest.raises(TerminalStateViolation):
                payment_service.update_status(payment.id, target)
        with pytest.raises(InvalidStateForRefund):
            payment_service.refund(payment.id)

        payment.refresh_from_db()
        assert payment.payment_status == PaymentStatus.REFUNDED

    def test_refund_event_written_to_outbox(self, payment_service, payment):
        payment_service.update_status(payment.id, PaymentStatus.PAID)
        payment_service.refund(payment.id)
        row = OutboxEvent.objects.get(
            topic="payments", event_type="PaymentRefunded", aggregate_id=str(payment.id)
        )
        assert row.payload["amount"] == "2000.00"

    def test_refunded_payment_rejects_field_updates(self, payment_service, payment):
        payment_service.update_status(payment.id, PaymentStatus.PAID)
        payment_service.refund(payment.id)
        with pytest.raises(TerminalStateViolation):
            payment_service.update_payment(
                payment.id, UpdatePaymentInfoDTO(payment_amount=Decimal("1"))
            )


class TestSettlement:
    def test_paid_records_transaction_and_date(self, payment_service, payment):
        updated = payment_service.update_status(
            payment.id, PaymentStatus.PAID, transaction_id="tx-99"
        )
        assert updated.payment_date is not None
        assert payment_service.get_by_transaction_id("tx-99").id == payment.id

    def test_unknown_transaction_id(self, payment_service):
        with pytest.raises(NotFound):
            payment_service.get_by_transaction_id("missing")


class TestPaymentRecords:
    def test_second_payment_for_order_rejected(self, payment_service, order, site):
        with pytest.raises(PaymentAlreadyExists):
            payment_service.create_payment(
                CreatePaymentInfoDTO(
                    order_id=order.id, site_id=site.id, payment_amount=Decimal("10")
                )
            )
        assert PaymentInfo.objects.filter(order_id=order.id).count() == 1

    def test_payment_for_unknown_order(self, payment_service, site):
        with pytest.raises(NotFound):
            payment_service.create_payment(
                CreatePaymentInfoDTO(
                    order_id=uuid4(), site_id=site.id, payment_amount=Decimal("10")
                )
            )

    def test_unpaid_payment_can_be_deleted_and_recreated(
        self, payment_service, payment, order, site
    ):
        payment_service.delete_payment(payment.id)
        recreated = payment_service.create_payment(
            CreatePaymentInfoDTO(
                order_id=order.id, site_id=site.id, payment_amount=Decimal("1500")
            )
        )
        assert recreated.payment_status == PaymentStatus.UNPAID

    def test_paid_payment_cannot_be_deleted(self, payment_service, payment):
        payment_service.update_status(payment.id, PaymentStatus.PAID)
        with pytest.raises(DependencyConflict):
            payment_service.delete_payment(payment.id)
        assert PaymentInfo.objects.filter(id=payment.id).exists()


class TestPaymentMethods:
    def test_duplicate_code_rejected(self, method_service, payment_method):
        with pytest.raises(UniquenessConflict):
            method_service.create_method(
                CreatePaymentMethodDTO(name="Another card", code=payment_method.code)
            )

    def test_toggle_flips_active(self, method_service, payment_method):
        assert method_service.toggle_status(payment_method.id).active is False
        assert method_service.toggle_status(payment_method.id).active is True

    def test_method_used_by_orders_cannot_be_deleted(
        self, method_service, payment_method, order
    ):
        with pytest.raises(DependencyConflict):
            method_service.delete_method(payment_method.id)

    def test_unused_method_deleted(self, method_service):
        method = method_service.create_method(
            CreatePaymentMethodDTO(name="Bank transfer", code="BANK")
        )
        method_service.delete_method(method.id)
        with pytest.raises(NotFound):
            method_service.get_method(method.id)
