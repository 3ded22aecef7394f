"""Domain events for the Shipping bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class ShipmentStatusChanged(DomainEvent):
    """Raised when a shipment moves along its status graph."""

    order_id: str
    old_status: str
    new_status: str
    tracking_number: Optional[str] = None
