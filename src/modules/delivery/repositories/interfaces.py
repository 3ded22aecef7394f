"""Delivery repository interfaces."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.delivery.models import DeliveryMethod, DeliverySlot


class IDeliveryMethodRepository(IRepository["DeliveryMethod"]):
    @abstractmethod
    def get_by_code(self, code: str) -> Optional[DeliveryMethod]:
        """Retrieve a method by its globally unique code."""

    @abstractmethod
    def dependent_counts(self, method: DeliveryMethod) -> Dict[str, int]:
        """Number of orders and slots that reference *method*."""


class IDeliverySlotRepository(IRepository["DeliverySlot"]):
    @abstractmethod
    def get_by_code(self, delivery_method_id: Any, code: str) -> Optional[DeliverySlot]:
        """Retrieve a slot by code within one delivery method."""

    @abstractmethod
    def list_for_method(self, delivery_method_id: Any) -> List[DeliverySlot]:
        """Slots of one delivery method, ordered by code."""

    @abstractmethod
    def dependent_counts(self, slot: DeliverySlot) -> Dict[str, int]:
        """Number of orders and shipments that reference *slot*."""
