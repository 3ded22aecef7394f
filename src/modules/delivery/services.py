"""Delivery service layer (Use Cases).

Business rules enforced:
- DeliveryMethod.code is globally unique.
- DeliverySlot.code is unique within its *target* method; renames and
  reparents exclude the slot itself from the check.
- A method with orders or slots, and a slot with orders or shipments,
  cannot be deleted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.exceptions import NotFound, wrap_store_errors
from modules.core.guards import (
    GuardResult,
    assert_unique,
    ensure_exists,
    require_deletable,
)
from modules.delivery.models import DeliveryMethod, DeliverySlot

if TYPE_CHECKING:
    from modules.delivery.dtos import (
        CreateDeliveryMethodDTO,
        CreateDeliverySlotDTO,
        UpdateDeliveryMethodDTO,
        UpdateDeliverySlotDTO,
    )
    from modules.delivery.repositories.interfaces import (
        IDeliveryMethodRepository,
        IDeliverySlotRepository,
    )

logger = structlog.get_logger(__name__)


class DeliveryMethodService:
    """Application service for DeliveryMethod use-cases."""

    def __init__(
        self,
        repository: IDeliveryMethodRepository,
        slot_repository: IDeliverySlotRepository,
    ) -> None:
        self._repo = repository
        self._slot_repo = slot_repository

    @wrap_store_errors("Failed to create delivery method.")
    @transaction.atomic
    def create_method(self, dto: CreateDeliveryMethodDTO) -> DeliveryMethod:
        assert_unique("DeliveryMethod", dto.code, self._repo.get_by_code(dto.code))
        method = self._repo.save(
            DeliveryMethod(name=dto.name, code=dto.code, type=dto.type)
        )
        logger.info("delivery_method.created", delivery_method_id=str(method.id))
        return method

    @wrap_store_errors("Failed to update delivery method.")
    @transaction.atomic
    def update_method(self, id: Any, dto: UpdateDeliveryMethodDTO) -> DeliveryMethod:
        method = ensure_exists(self._repo, "DeliveryMethod", id)
        if dto.code is not None:
            assert_unique(
                "DeliveryMethod",
                dto.code,
                self._repo.get_by_code(dto.code),
                excluding_id=method.id,
            )
        for field, value in dto.model_dump(exclude_none=True).items():
            setattr(method, field, value)
        method = self._repo.save(method)
        logger.info("delivery_method.updated", delivery_method_id=str(method.id))
        return method

    def can_delete(self, method: DeliveryMethod) -> GuardResult:
        counts = self._repo.dependent_counts(method)
        if counts["orders"]:
            return GuardResult.deny("delivery method has orders")
        if counts["slots"]:
            return GuardResult.deny("delivery method has slots")
        return GuardResult.allow()

    @wrap_store_errors("Failed to delete delivery method.")
    @transaction.atomic
    def delete_method(self, id: Any) -> None:
        method = ensure_exists(self._repo, "DeliveryMethod", id)
        require_deletable("DeliveryMethod", method.id, self.can_delete(method))
        self._repo.delete(method.id)
        logger.info("delivery_method.deleted", delivery_method_id=str(method.id))

    def list_methods(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[DeliveryMethod]:
        return self._repo.list(filters)

    def get_method(self, id: Any) -> DeliveryMethod:
        return ensure_exists(self._repo, "DeliveryMethod", id)

    def get_by_code(self, code: str) -> DeliveryMethod:
        method = self._repo.get_by_code(code)
        if method is None:
            raise NotFound("DeliveryMethod", code)
        return method

    def list_slots(self, id: Any) -> List[DeliverySlot]:
        method = ensure_exists(self._repo, "DeliveryMethod", id)
        return self._slot_repo.list_for_method(method.id)


class DeliverySlotService:
    """Application service for DeliverySlot use-cases."""

    def __init__(
        self,
        repository: IDeliverySlotRepository,
        method_repository: IDeliveryMethodRepository,
    ) -> None:
        self._repo = repository
        self._method_repo = method_repository

    @wrap_store_errors("Failed to create delivery slot.")
    @transaction.atomic
    def create_slot(self, dto: CreateDeliverySlotDTO) -> DeliverySlot:
        """Create a slot under an existing method.

        Raises:
            NotFound: the delivery method does not exist.
            UniquenessConflict: the code is taken within that method.
        """
        method = ensure_exists(self._method_repo, "DeliveryMethod", dto.delivery_method_id)
        assert_unique(
            "DeliverySlot",
            dto.code,
            self._repo.get_by_code(method.id, dto.code),
            scope=f"delivery method {method.code}",
        )
        slot = self._repo.save(
            DeliverySlot(delivery_method=method, name=dto.name, code=dto.code)
        )
        logger.info(
            "delivery_slot.created",
            delivery_slot_id=str(slot.id),
            delivery_method_id=str(method.id),
        )
        return slot

    @wrap_store_errors("Failed to update delivery slot.")
    @transaction.atomic
    def update_slot(self, id: Any, dto: UpdateDeliverySlotDTO) -> DeliverySlot:
        """Rename and/or move a slot to another method.

        Uniqueness is checked in the target method with the target code.
        """
        slot = ensure_exists(self._repo, "DeliverySlot", id)
        target_method = slot.delivery_method
        if dto.delivery_method_id is not None:
            target_method = ensure_exists(
                self._method_repo, "DeliveryMethod", dto.delivery_method_id
            )
        target_code = dto.code if dto.code is not None else slot.code

        assert_unique(
            "DeliverySlot",
            target_code,
            self._repo.get_by_code(target_method.id, target_code),
            excluding_id=slot.id,
            scope=f"delivery method {target_method.code}",
        )

        slot.delivery_method = target_method
        slot.code = target_code
        if dto.name is not None:
            slot.name = dto.name
        slot = self._repo.save(slot)
        logger.info(
            "delivery_slot.updated",
            delivery_slot_id=str(slot.id),
            delivery_method_id=str(target_method.id),
        )
        return slot

    def can_delete(self, slot: DeliverySlot) -> GuardResult:
        counts = self._repo.dependent_counts(slot)
        if counts["orders"]:
            return GuardResult.deny("delivery slot has orders")
        if counts["shipments"]:
            return GuardResult.deny("delivery slot has shipments")
        return GuardResult.allow()

    @wrap_store_errors("Failed to delete delivery slot.")
    @transaction.atomic
    def delete_slot(self, id: Any) -> None:
        slot = ensure_exists(self._repo, "DeliverySlot", id)
        require_deletable("DeliverySlot", slot.id, self.can_delete(slot))
        self._repo.delete(slot.id)
        logger.info("delivery_slot.deleted", delivery_slot_id=str(slot.id))

    def list_slots(self, filters: Optional[Dict[str, Any]] = None) -> List[DeliverySlot]:
        return self._repo.list(filters)

    def get_slot(self, id: Any) -> DeliverySlot:
        return ensure_exists(self._repo, "DeliverySlot", id)

    def get_by_code(self, delivery_method_id: Any, code: str) -> DeliverySlot:
        method = ensure_exists(self._method_repo, "DeliveryMethod", delivery_method_id)
        slot = self._repo.get_by_code(method.id, code)
        if slot is None:
            raise NotFound("DeliverySlot", code)
        return slot
