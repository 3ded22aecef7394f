"""Django ORM implementations of the delivery repositories."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from django.db import models

from modules.core.repositories.django_repository import DjangoRepository
from modules.delivery.models import DeliveryMethod, DeliverySlot
from modules.delivery.repositories.interfaces import (
    IDeliveryMethodRepository,
    IDeliverySlotRepository,
)


class DeliveryMethodDjangoRepository(
    DjangoRepository[DeliveryMethod], IDeliveryMethodRepository
):
    model = DeliveryMethod

    def get_by_code(self, code: str) -> Optional[DeliveryMethod]:
        return DeliveryMethod.objects.filter(code=code).first()

    def dependent_counts(self, method: DeliveryMethod) -> Dict[str, int]:
        return {"orders": method.orders.count(), "slots": method.slots.count()}


class DeliverySlotDjangoRepository(
    DjangoRepository[DeliverySlot], IDeliverySlotRepository
):
    model = DeliverySlot

    def get_queryset(self) -> models.QuerySet:
        return DeliverySlot.objects.select_related("delivery_method")

    def get_by_code(self, delivery_method_id: Any, code: str) -> Optional[DeliverySlot]:
        return (
            self.get_queryset()
            .filter(delivery_method_id=delivery_method_id, code=code)
            .first()
        )

    def list_for_method(self, delivery_method_id: Any) -> List[DeliverySlot]:
        return list(
            self.get_queryset()
            .filter(delivery_method_id=delivery_method_id)
            .order_by("code")
        )

    def dependent_counts(self, slot: DeliverySlot) -> Dict[str, int]:
        return {"orders": slot.orders.count(), "shipments": slot.shipments.count()}
