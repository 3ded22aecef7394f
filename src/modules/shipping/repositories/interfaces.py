"""Shipping repository interfaces."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.shipping.models import Shipment, ShippingAddress


class IShippingAddressRepository(IRepository["ShippingAddress"]):
    @abstractmethod
    def search(self, term: str) -> List[ShippingAddress]:
        """Match name, prefecture, address line or postal code."""

    @abstractmethod
    def prefecture_counts(self) -> List[Dict[str, object]]:
        """``[{"prefecture": ..., "count": ...}]`` ordered by prefecture."""

    @abstractmethod
    def count_shipments(self, address: ShippingAddress) -> int:
        """Number of shipments sent to *address*."""


class IShipmentRepository(IRepository["Shipment"]):
    @abstractmethod
    def get_by_tracking_number(self, tracking_number: str) -> Optional[Shipment]:
        """Retrieve a shipment by carrier tracking number."""
