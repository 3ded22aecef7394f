"""Event handlers for Payments domain events."""

from __future__ import annotations

import structlog

from modules.payments.events import PaymentRefunded, PaymentStatusChanged
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class PaymentStatusChangedHandler(IEventHandler[PaymentStatusChanged]):
    def handle(self, event: PaymentStatusChanged) -> None:
        logger.info(
            "payment.event.status_changed",
            payment_id=str(event.aggregate_id),
            order_id=event.order_id,
            old_status=event.old_status,
            new_status=event.new_status,
        )


class PaymentRefundedHandler(IEventHandler[PaymentRefunded]):
    def handle(self, event: PaymentRefunded) -> None:
        logger.info(
            "payment.event.refunded",
            payment_id=str(event.aggregate_id),
            order_id=event.order_id,
            amount=event.amount,
        )


payment_status_changed_handler = PaymentStatusChangedHandler()
payment_refunded_handler = PaymentRefundedHandler()
