"""Payment domain exceptions."""

from __future__ import annotations

from typing import Any

from modules.core.exceptions import Conflict, InvalidTransition


class PaymentAlreadyExists(Conflict):
    """The order already has its payment record."""

    code = "payment_exists"

    def __init__(self, order_id: Any) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id} already has payment information.")


class InvalidStateForRefund(InvalidTransition):
    """Only a PAID payment can be refunded."""

    code = "invalid_state_for_refund"

    def __init__(self, payment_id: Any, current: str) -> None:
        self.payment_id = payment_id
        super().__init__(
            "PaymentInfo",
            current,
            "REFUNDED",
            message=f"Payment {payment_id} is {current}; only PAID payments can be refunded.",
        )
