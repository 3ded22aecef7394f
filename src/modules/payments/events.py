"""Domain events for the Payments bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class PaymentStatusChanged(DomainEvent):
    """Raised when a payment moves along its status graph."""

    order_id: str
    old_status: str
    new_status: str


@dataclass(frozen=True, kw_only=True)
class PaymentRefunded(DomainEvent):
    """Raised when a PAID payment is refunded."""

    order_id: str
    amount: str
