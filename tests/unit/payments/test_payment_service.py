"""Unit tests for PaymentInfoService with stubbed repositories."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from freezegun import freeze_time

from modules.core.exceptions import InvalidTransition, TerminalStateViolation
from modules.payments.constants import PaymentStatus
from modules.payments.events import PaymentRefunded, PaymentStatusChanged
from modules.payments.exceptions import InvalidStateForRefund
from modules.payments.models import PaymentInfo
from modules.payments.services import PaymentInfoService

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    repository = MagicMock(name="payment_repository")
    repository.save.side_effect = lambda payment: payment
    return repository


@pytest.fixture()
def service(repo):
    return PaymentInfoService(
        repository=repo,
        order_repository=MagicMock(),
        site_repository=MagicMock(),
    )


def _payment(status, **kwargs):
    return PaymentInfo(
        payment_status=status, payment_amount=Decimal("2000"), **kwargs
    )


class TestUpdateStatus:
    @freeze_time("2024-03-01 09:30:00")
    def test_paid_stamps_date_and_transaction(self, service, repo):
        payment = _payment(PaymentStatus.UNPAID)
        repo.get_for_update.return_value = payment

        service.update_status(payment.id, PaymentStatus.PAID, transaction_id="tx-42")

        assert payment.payment_status == PaymentStatus.PAID
        assert payment.transaction_id == "tx-42"
        assert payment.payment_date == datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
        (event,) = payment.domain_events
        assert isinstance(event, PaymentStatusChanged)
        assert event.new_status == PaymentStatus.PAID

    def test_authorized_without_transaction_keeps_existing_id(self, service, repo):
        payment = _payment(PaymentStatus.UNPAID, transaction_id="pre-auth")
        repo.get_for_update.return_value = payment

        service.update_status(payment.id, PaymentStatus.AUTHORIZED)

        assert payment.transaction_id == "pre-auth"
        assert payment.payment_date is not None

    def test_refunded_is_not_reachable_through_status_update(self, service, repo):
        payment = _payment(PaymentStatus.PAID)
        repo.get_for_update.return_value = payment

        with pytest.raises(InvalidTransition, match="refund operation"):
            service.update_status(payment.id, PaymentStatus.REFUNDED)

        assert payment.payment_status == PaymentStatus.PAID
        repo.save.assert_not_called()

    def test_refunded_payment_rejects_updates(self, service, repo):
        payment = _payment(PaymentStatus.REFUNDED)
        repo.get_for_update.return_value = payment

        with pytest.raises(TerminalStateViolation):
            service.update_status(payment.id, PaymentStatus.PAID)


class TestRefund:
    def test_authorized_payment_cannot_be_refunded(self, service, repo):
        payment = _payment(PaymentStatus.AUTHORIZED)
        repo.get_for_update.return_value = payment

        with pytest.raises(InvalidStateForRefund):
            service.refund(payment.id)

        assert payment.payment_status == PaymentStatus.AUTHORIZED

    def test_paid_payment_is_refunded(self, service, repo):
        payment = _payment(PaymentStatus.PAID)
        repo.get_for_update.return_value = payment

        service.refund(payment.id)

        assert payment.payment_status == PaymentStatus.REFUNDED
        (event,) = payment.domain_events
        assert isinstance(event, PaymentRefunded)
        assert event.amount == "2000"


class TestDeletionPolicy:
    def test_only_unpaid_payments_are_deletable(self, service):
        assert service.can_delete(_payment(PaymentStatus.UNPAID)).ok
        assert not service.can_delete(_payment(PaymentStatus.AUTHORIZED)).ok
        assert not service.can_delete(_payment(PaymentStatus.PAID)).ok
