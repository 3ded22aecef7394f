"""Shipment domain constants.

RETURNED is kept for stored data; no transition leads to it.
"""

from django.db import models

from shared.domain.state_machine import StateMachine


class ShippingStatus(models.TextChoices):
    PREPARING = "PREPARING", "Preparing"
    IN_TRANSIT = "IN_TRANSIT", "In transit"
    DELIVERED = "DELIVERED", "Delivered"
    RETURNED = "RETURNED", "Returned"


VALID_TRANSITIONS: dict[str, set[str]] = {
    ShippingStatus.PREPARING: {ShippingStatus.IN_TRANSIT},
    ShippingStatus.IN_TRANSIT: {ShippingStatus.DELIVERED},
    ShippingStatus.DELIVERED: set(),
    ShippingStatus.RETURNED: set(),
}

TERMINAL_STATES: set[str] = {ShippingStatus.DELIVERED}

SHIPMENT_STATE_MACHINE = StateMachine(VALID_TRANSITIONS, TERMINAL_STATES)
