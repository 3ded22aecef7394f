"""ShippingAddress and Shipment models.

Business rules implemented:
- An address referenced by a shipment cannot be deleted.
- ``shipping_status`` only changes through ``ShipmentService``;
  DELIVERED is terminal.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.shipping.constants import TERMINAL_STATES, ShippingStatus
from shared.domain.events import DomainEventMixin


class ShippingAddress(BaseModel):
    name = models.CharField(max_length=255)
    postal_code = models.CharField(max_length=20)
    prefecture = models.CharField(max_length=100)
    address_line = models.CharField(max_length=500)

    class Meta:
        db_table = "shipping_addresses"
        ordering = ["prefecture", "name"]
        indexes = [
            models.Index(fields=["prefecture"], name="address_prefecture_idx"),
            models.Index(fields=["postal_code"], name="address_postal_code_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name}, {self.prefecture}"


class Shipment(DomainEventMixin, BaseModel):
    """Shipment of an order to one address.

    ``tracking_number`` and ``shipped_at`` are set when the shipment
    leaves with a tracking number.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="shipments",
    )
    site = models.ForeignKey(
        "stores.Site",
        on_delete=models.PROTECT,
        related_name="shipments",
    )
    shop = models.ForeignKey(
        "stores.Shop",
        on_delete=models.PROTECT,
        related_name="shipments",
    )
    address = models.ForeignKey(
        "shipping.ShippingAddress",
        on_delete=models.PROTECT,
        related_name="shipments",
    )
    delivery_slot = models.ForeignKey(
        "delivery.DeliverySlot",
        on_delete=models.PROTECT,
        related_name="shipments",
        null=True,
        blank=True,
    )
    tracking_number = models.CharField(max_length=100, blank=True, default="")
    shipped_at = models.DateTimeField(null=True, blank=True)
    shipping_status = models.CharField(
        max_length=20,
        choices=ShippingStatus.choices,
        default=ShippingStatus.PREPARING,
    )

    class Meta:
        db_table = "shipments"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["shipping_status"], name="shipment_status_idx"),
            models.Index(fields=["tracking_number"], name="shipment_tracking_idx"),
        ]

    @property
    def is_terminal(self) -> bool:
        return self.shipping_status in TERMINAL_STATES

    def __str__(self) -> str:
        return f"Shipment {self.id} ({self.shipping_status})"
