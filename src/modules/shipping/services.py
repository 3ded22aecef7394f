"""Shipping service layer (Use Cases).

Business rules enforced:
- Status moves along ``SHIPMENT_STATE_MACHINE``; DELIVERED freezes the
  shipment.
- Entering IN_TRANSIT with a tracking number stores it and stamps
  ``shipped_at``.
- Only PREPARING shipments, and only addresses without shipments, can
  be deleted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction
from django.utils import timezone

from modules.core.exceptions import (
    InvalidTransition,
    NotFound,
    TerminalStateViolation,
    wrap_store_errors,
)
from modules.core.guards import GuardResult, ensure_exists, require_deletable
from modules.shipping.constants import SHIPMENT_STATE_MACHINE, ShippingStatus
from modules.shipping.events import ShipmentStatusChanged
from modules.shipping.models import Shipment, ShippingAddress
from shared.domain.state_machine import Rejection

if TYPE_CHECKING:
    from modules.core.repositories.interfaces import IRepository
    from modules.shipping.dtos import (
        CreateShipmentDTO,
        ShippingAddressDTO,
        UpdateShipmentDTO,
        UpdateShippingAddressDTO,
    )
    from modules.shipping.repositories.interfaces import (
        IShipmentRepository,
        IShippingAddressRepository,
    )

logger = structlog.get_logger(__name__)


class ShippingAddressService:
    """Application service for ShippingAddress use-cases."""

    def __init__(self, repository: IShippingAddressRepository) -> None:
        self._repo = repository

    @wrap_store_errors("Failed to create shipping address.")
    @transaction.atomic
    def create_address(self, dto: ShippingAddressDTO) -> ShippingAddress:
        address = self._repo.save(ShippingAddress(**dto.model_dump()))
        logger.info("shipping_address.created", address_id=str(address.id))
        return address

    @wrap_store_errors("Failed to update shipping address.")
    @transaction.atomic
    def update_address(
        self, id: Any, dto: UpdateShippingAddressDTO
    ) -> ShippingAddress:
        address = ensure_exists(self._repo, "ShippingAddress", id)
        for field, value in dto.model_dump(exclude_none=True).items():
            setattr(address, field, value)
        address = self._repo.save(address)
        logger.info("shipping_address.updated", address_id=str(address.id))
        return address

    def can_delete(self, address: ShippingAddress) -> GuardResult:
        if self._repo.count_shipments(address):
            return GuardResult.deny("address has shipments")
        return GuardResult.allow()

    @wrap_store_errors("Failed to delete shipping address.")
    @transaction.atomic
    def delete_address(self, id: Any) -> None:
        address = ensure_exists(self._repo, "ShippingAddress", id)
        require_deletable("ShippingAddress", address.id, self.can_delete(address))
        self._repo.delete(address.id)
        logger.info("shipping_address.deleted", address_id=str(address.id))

    def list_addresses(
        self,
        filters: Optional[Dict[str, Any]] = None,
        search: Optional[str] = None,
    ) -> List[ShippingAddress]:
        if search:
            return self._repo.search(search)
        return self._repo.list(filters)

    def get_address(self, id: Any) -> ShippingAddress:
        return ensure_exists(self._repo, "ShippingAddress", id)

    def list_prefectures(self) -> List[Dict[str, object]]:
        return self._repo.prefecture_counts()


class ShipmentService:
    """Application service for Shipment use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IShipmentRepository,
        order_repository: IRepository,
        site_repository: IRepository,
        shop_repository: IRepository,
        address_repository: IShippingAddressRepository,
        slot_repository: IRepository,
    ) -> None:
        self._repo = repository
        self._order_repo = order_repository
        self._site_repo = site_repository
        self._shop_repo = shop_repository
        self._address_repo = address_repository
        self._slot_repo = slot_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @wrap_store_errors("Failed to create shipment.")
    @transaction.atomic
    def create_shipment(self, dto: CreateShipmentDTO) -> Shipment:
        """Attach an additional shipment to an order.

        Raises:
            NotFound: the order, site, shop, address or slot does not exist.
        """
        order = ensure_exists(self._order_repo, "Order", dto.order_id)
        site = ensure_exists(self._site_repo, "Site", dto.site_id)
        shop = ensure_exists(self._shop_repo, "Shop", dto.shop_id)
        address = ensure_exists(self._address_repo, "ShippingAddress", dto.address_id)
        slot = None
        if dto.delivery_slot_id is not None:
            slot = ensure_exists(self._slot_repo, "DeliverySlot", dto.delivery_slot_id)

        shipment = Shipment(
            order=order,
            site=site,
            shop=shop,
            address=address,
            delivery_slot=slot,
            tracking_number=dto.tracking_number,
            shipped_at=dto.shipped_at,
        )
        shipment = self._repo.save(shipment)
        logger.info(
            "shipment.created", shipment_id=str(shipment.id), order_id=str(order.id)
        )
        return shipment

    @wrap_store_errors("Failed to update shipment status.")
    @transaction.atomic
    def update_status(
        self,
        shipment_id: Any,
        new_status: str,
        tracking_number: Optional[str] = None,
    ) -> Shipment:
        """Move a shipment along its status graph.

        The row is re-read under ``SELECT FOR UPDATE`` before the
        transition is validated.

        Raises:
            NotFound: the shipment does not exist.
            TerminalStateViolation: the shipment is DELIVERED.
            InvalidTransition: the edge does not exist.
        """
        shipment = self._repo.get_for_update(shipment_id)
        if shipment is None:
            raise NotFound("Shipment", shipment_id)

        log = logger.bind(
            shipment_id=str(shipment.id),
            current_status=shipment.shipping_status,
            new_status=new_status,
        )
        result = SHIPMENT_STATE_MACHINE.transition(shipment.shipping_status, new_status)
        if result.rejection == Rejection.TERMINAL:
            log.warning("shipment.terminal_state")
            raise TerminalStateViolation(
                "Shipment", shipment.id, shipment.shipping_status
            )
        if not result.accepted:
            log.warning("shipment.invalid_transition")
            raise InvalidTransition("Shipment", result.current, result.requested)

        old_status = shipment.shipping_status
        shipment.shipping_status = result.state
        if result.state == ShippingStatus.IN_TRANSIT and tracking_number:
            shipment.tracking_number = tracking_number
            shipment.shipped_at = timezone.now()
        shipment.add_domain_event(
            ShipmentStatusChanged(
                aggregate_id=shipment.id,
                order_id=str(shipment.order_id),
                old_status=old_status,
                new_status=result.state,
                tracking_number=shipment.tracking_number or None,
            )
        )
        shipment = self._repo.save(shipment)
        log.info("shipment.status_updated")
        return shipment

    @wrap_store_errors("Failed to update shipment.")
    @transaction.atomic
    def update_shipment(self, shipment_id: Any, dto: UpdateShipmentDTO) -> Shipment:
        """Update address, slot, tracking number or ship date.

        Raises:
            TerminalStateViolation: the shipment is DELIVERED.
        """
        shipment = self._repo.get_for_update(shipment_id)
        if shipment is None:
            raise NotFound("Shipment", shipment_id)
        if shipment.is_terminal:
            raise TerminalStateViolation(
                "Shipment", shipment.id, shipment.shipping_status
            )

        if dto.address_id is not None:
            shipment.address = ensure_exists(
                self._address_repo, "ShippingAddress", dto.address_id
            )
        if dto.delivery_slot_id is not None:
            shipment.delivery_slot = ensure_exists(
                self._slot_repo, "DeliverySlot", dto.delivery_slot_id
            )
        if dto.tracking_number is not None:
            shipment.tracking_number = dto.tracking_number
        if dto.shipped_at is not None:
            shipment.shipped_at = dto.shipped_at

        shipment = self._repo.save(shipment)
        logger.info("shipment.updated", shipment_id=str(shipment.id))
        return shipment

    def can_delete(self, shipment: Shipment) -> GuardResult:
        if shipment.shipping_status != ShippingStatus.PREPARING:
            return GuardResult.deny(f"shipment is {shipment.shipping_status}")
        return GuardResult.allow()

    @wrap_store_errors("Failed to delete shipment.")
    @transaction.atomic
    def delete_shipment(self, shipment_id: Any) -> None:
        shipment = self._repo.get_for_update(shipment_id)
        if shipment is None:
            raise NotFound("Shipment", shipment_id)
        require_deletable("Shipment", shipment.id, self.can_delete(shipment))
        self._repo.delete(shipment.id)
        logger.info("shipment.deleted", shipment_id=str(shipment.id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_shipments(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[Shipment]:
        return self._repo.list(filters)

    def get_shipment(self, shipment_id: Any) -> Shipment:
        return ensure_exists(self._repo, "Shipment", shipment_id)

    def get_by_tracking_number(self, tracking_number: str) -> Shipment:
        shipment = self._repo.get_by_tracking_number(tracking_number)
        if shipment is None:
            raise NotFound("Shipment", tracking_number)
        return shipment
