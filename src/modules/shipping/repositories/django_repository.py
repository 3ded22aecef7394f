"""Django ORM implementations of the shipping repositories.

``Shipment`` writes flush the aggregate's domain events to the outbox
inside the caller's transaction.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from django.db import models
from django.db.models import Count, Q

from modules.core.repositories.django_repository import DjangoRepository
from modules.shipping.models import Shipment, ShippingAddress
from modules.shipping.repositories.interfaces import (
    IShipmentRepository,
    IShippingAddressRepository,
)


class ShippingAddressDjangoRepository(
    DjangoRepository[ShippingAddress], IShippingAddressRepository
):
    model = ShippingAddress

    def search(self, term: str) -> List[ShippingAddress]:
        return list(
            ShippingAddress.objects.filter(
                Q(name__icontains=term)
                | Q(prefecture__icontains=term)
                | Q(address_line__icontains=term)
                | Q(postal_code__contains=term)
            ).order_by("prefecture", "name")
        )

    def prefecture_counts(self) -> List[Dict[str, object]]:
        rows = (
            ShippingAddress.objects.values("prefecture")
            .annotate(count=Count("id"))
            .order_by("prefecture")
        )
        return [{"prefecture": row["prefecture"], "count": row["count"]} for row in rows]

    def count_shipments(self, address: ShippingAddress) -> int:
        return address.shipments.count()


class ShipmentDjangoRepository(DjangoRepository[Shipment], IShipmentRepository):
    model = Shipment
    outbox_topic = "shipping"

    def get_queryset(self) -> models.QuerySet:
        return Shipment.objects.select_related(
            "order", "site", "shop", "address", "delivery_slot"
        )

    def get_by_tracking_number(self, tracking_number: str) -> Optional[Shipment]:
        if not tracking_number:
            return None
        return self.get_queryset().filter(tracking_number=tracking_number).first()
