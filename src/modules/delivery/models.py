"""DeliveryMethod and DeliverySlot models.

Business rules implemented:
- DeliveryMethod.code is unique across the system.
- DeliverySlot.code is unique only within its parent method.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.delivery.constants import DeliveryMethodType


class DeliveryMethod(BaseModel):
    name = models.CharField(max_length=255)
    code = models.CharField(max_length=50, unique=True)
    type = models.CharField(
        max_length=20,
        choices=DeliveryMethodType.choices,
        default=DeliveryMethodType.STANDARD,
    )

    class Meta:
        db_table = "delivery_methods"
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.code} ({self.name})"


class DeliverySlot(BaseModel):
    """Time window offered by a delivery method (e.g. ``AM``, ``14-16``)."""

    delivery_method = models.ForeignKey(
        "delivery.DeliveryMethod",
        on_delete=models.PROTECT,
        related_name="slots",
    )
    name = models.CharField(max_length=255)
    code = models.CharField(max_length=50)

    class Meta:
        db_table = "delivery_slots"
        ordering = ["delivery_method_id", "code"]
        constraints = [
            models.UniqueConstraint(
                fields=["delivery_method", "code"],
                name="delivery_slot_code_per_method",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.code} ({self.name})"
