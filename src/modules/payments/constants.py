"""Payment domain constants.

Status choices and the payment state machine.  ``PAID -> REFUNDED`` is
only taken by the refund operation.
"""

from django.db import models

from shared.domain.state_machine import StateMachine


class PaymentStatus(models.TextChoices):
    UNPAID = "UNPAID", "Unpaid"
    AUTHORIZED = "AUTHORIZED", "Authorized"
    PAID = "PAID", "Paid"
    REFUNDED = "REFUNDED", "Refunded"


VALID_TRANSITIONS: dict[str, set[str]] = {
    PaymentStatus.UNPAID: {PaymentStatus.AUTHORIZED, PaymentStatus.PAID},
    PaymentStatus.AUTHORIZED: {PaymentStatus.PAID},
    PaymentStatus.PAID: {PaymentStatus.REFUNDED},
    PaymentStatus.REFUNDED: set(),
}

TERMINAL_STATES: set[str] = {PaymentStatus.REFUNDED}

PAYMENT_STATE_MACHINE = StateMachine(VALID_TRANSITIONS, TERMINAL_STATES)

# Entering one of these stamps payment_date
SETTLEMENT_STATES: set[str] = {PaymentStatus.AUTHORIZED, PaymentStatus.PAID}
