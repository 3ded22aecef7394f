"""Event handlers for Shipping domain events."""

from __future__ import annotations

import structlog

from modules.shipping.events import ShipmentStatusChanged
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class ShipmentStatusChangedHandler(IEventHandler[ShipmentStatusChanged]):
    def handle(self, event: ShipmentStatusChanged) -> None:
        logger.info(
            "shipment.event.status_changed",
            shipment_id=str(event.aggregate_id),
            order_id=event.order_id,
            old_status=event.old_status,
            new_status=event.new_status,
        )


shipment_status_changed_handler = ShipmentStatusChangedHandler()
