"""Order service layer (Use Cases).

Orchestrates order creation and the order lifecycle.  All write
operations are atomic; the service defines the unit-of-work boundary.

Business rules enforced:
- Every referenced customer, site, shop, method, slot and product must
  exist.
- Creation writes the address, order, items, first status log, payment
  and shipment in one transaction.  Any failure rolls all of it back.
- Status moves along ``ORDER_STATE_MACHINE``; each committed change
  appends one status log row.
- COMPLETED and CANCELED orders are frozen.
- Order edits carry the billing amount to the UNPAID payment and the
  delivery slot to PREPARING shipments; a child past that state blocks
  the edit.
- Only PENDING orders whose payment is UNPAID and whose shipments are
  PREPARING can be deleted.  Addresses left without shipments go too.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
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
from modules.orders.constants import ORDER_STATE_MACHINE, OrderStatus
from modules.orders.events import OrderCreated, OrderStatusChanged
from modules.orders.exceptions import ChildRecordLocked, ProductNotFound
from modules.orders.models import Order, OrderItem
from modules.payments.constants import PaymentStatus
from modules.payments.models import PaymentInfo
from modules.shipping.constants import ShippingStatus
from modules.shipping.models import Shipment, ShippingAddress
from shared.domain.state_machine import Rejection

if TYPE_CHECKING:
    from modules.customers.models import Customer
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.delivery.models import DeliveryMethod, DeliverySlot
    from modules.delivery.repositories.interfaces import (
        IDeliveryMethodRepository,
        IDeliverySlotRepository,
    )
    from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
    from modules.orders.models import OrderStatusLog
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.payments.models import PaymentMethod
    from modules.payments.repositories.interfaces import (
        IPaymentInfoRepository,
        IPaymentMethodRepository,
    )
    from modules.products.repositories.interfaces import IProductRepository
    from modules.shipping.repositories.interfaces import (
        IShipmentRepository,
        IShippingAddressRepository,
    )
    from modules.stores.models import Shop, Site
    from modules.stores.repositories.interfaces import (
        IShopRepository,
        ISiteRepository,
    )

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class _OrderReferences:
    customer: Customer
    site: Site
    shop: Shop
    payment_method: PaymentMethod
    delivery_method: DeliveryMethod
    delivery_slot: Optional[DeliverySlot]


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        site_repository: ISiteRepository,
        shop_repository: IShopRepository,
        payment_method_repository: IPaymentMethodRepository,
        delivery_method_repository: IDeliveryMethodRepository,
        delivery_slot_repository: IDeliverySlotRepository,
        product_repository: IProductRepository,
        address_repository: IShippingAddressRepository,
        payment_repository: IPaymentInfoRepository,
        shipment_repository: IShipmentRepository,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._site_repo = site_repository
        self._shop_repo = shop_repository
        self._payment_method_repo = payment_method_repository
        self._delivery_method_repo = delivery_method_repository
        self._slot_repo = delivery_slot_repository
        self._product_repo = product_repository
        self._address_repo = address_repository
        self._payment_repo = payment_repository
        self._shipment_repo = shipment_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @wrap_store_errors("Failed to create order.")
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create an order together with its payment and shipment.

        Steps:
        1. Validate the referenced master data.
        2. Generate the order number.
        3. In one transaction: shipping address, order, items (product
           snapshot), initial PENDING log, UNPAID payment for the billing
           amount, PREPARING shipment.
        4. Re-read the committed order with every relation loaded.

        Raises:
            NotFound: a referenced customer, site, shop, payment method,
                delivery method or delivery slot does not exist.
            ProductNotFound: an item references a missing product.
        """
        log = logger.bind(customer_id=str(dto.customer_id))
        log.info("order.creation_started", item_count=len(dto.items))

        refs = self._resolve_references(dto)
        order_number = Order.generate_order_number()
        order = self._persist_new_order(dto, refs, order_number)

        log.info(
            "order.created",
            order_id=str(order.id),
            order_number=order_number,
            billing_amount=str(dto.billing_amount),
        )
        return self._order_repo.get_by_id(order.id)

    def _resolve_references(self, dto: CreateOrderDTO) -> _OrderReferences:
        slot = None
        if dto.delivery_slot_id is not None:
            slot = ensure_exists(self._slot_repo, "DeliverySlot", dto.delivery_slot_id)
        return _OrderReferences(
            customer=ensure_exists(self._customer_repo, "Customer", dto.customer_id),
            site=ensure_exists(self._site_repo, "Site", dto.site_id),
            shop=ensure_exists(self._shop_repo, "Shop", dto.shop_id),
            payment_method=ensure_exists(
                self._payment_method_repo, "PaymentMethod", dto.payment_method_id
            ),
            delivery_method=ensure_exists(
                self._delivery_method_repo, "DeliveryMethod", dto.delivery_method_id
            ),
            delivery_slot=slot,
        )

    @transaction.atomic
    def _persist_new_order(
        self, dto: CreateOrderDTO, refs: _OrderReferences, order_number: str
    ) -> Order:
        address = self._address_repo.save(
            ShippingAddress(**dto.shipping_address.model_dump())
        )

        order = Order(
            order_number=order_number,
            customer=refs.customer,
            site=refs.site,
            shop=refs.shop,
            payment_method=refs.payment_method,
            delivery_method=refs.delivery_method,
            delivery_slot=refs.delivery_slot,
            total_amount=dto.total_amount,
            shipping_fee=dto.shipping_fee,
            discount_amount=dto.discount_amount,
            billing_amount=dto.billing_amount,
            status=OrderStatus.PENDING,
            order_date=timezone.now(),
            desired_arrival_date=dto.desired_arrival_date,
            memo=dto.memo,
        )
        order.add_domain_event(
            OrderCreated(
                aggregate_id=order.id,
                order_number=order_number,
                customer_id=str(refs.customer.id),
                billing_amount=str(dto.billing_amount),
            )
        )
        order = self._order_repo.save(order)

        for item_dto in dto.items:
            product = self._product_repo.get_by_id(item_dto.product_id)
            if product is None:
                logger.warning(
                    "order.product_not_found",
                    order_number=order_number,
                    product_id=str(item_dto.product_id),
                )
                raise ProductNotFound(item_dto.product_id)
            self._order_repo.add_item(
                OrderItem(
                    order=order,
                    product=product,
                    category_id=product.category_id,
                    product_code=product.code,
                    product_name=product.name,
                    quantity=item_dto.quantity,
                    unit_price=item_dto.unit_price,
                    memo=item_dto.memo,
                )
            )

        self._order_repo.add_status_log(order, OrderStatus.PENDING)

        self._payment_repo.save(
            PaymentInfo(
                order=order,
                site=refs.site,
                payment_amount=dto.billing_amount,
            )
        )
        self._shipment_repo.save(
            Shipment(
                order=order,
                site=refs.site,
                shop=refs.shop,
                address=address,
                delivery_slot=refs.delivery_slot,
            )
        )
        return order

    @wrap_store_errors("Failed to update order status.")
    @transaction.atomic
    def update_status(self, order_id: Any, new_status: str) -> Order:
        """Move an order along its status graph.

        The row is re-read under ``SELECT FOR UPDATE``; the status write
        and its log row commit together.

        Raises:
            NotFound: the order does not exist.
            TerminalStateViolation: the order is COMPLETED or CANCELED.
            InvalidTransition: the edge does not exist.
        """
        order = self._order_repo.get_for_update(order_id)
        if order is None:
            raise NotFound("Order", order_id)

        log = logger.bind(
            order_id=str(order.id),
            current_status=order.status,
            new_status=new_status,
        )
        result = ORDER_STATE_MACHINE.transition(order.status, new_status)
        if result.rejection == Rejection.TERMINAL:
            log.warning("order.terminal_state")
            raise TerminalStateViolation("Order", order.id, order.status)
        if not result.accepted:
            log.warning("order.invalid_transition")
            raise InvalidTransition("Order", result.current, result.requested)

        old_status = order.status
        order.status = result.state
        order.add_domain_event(
            OrderStatusChanged(
                aggregate_id=order.id,
                old_status=old_status,
                new_status=result.state,
            )
        )
        self._order_repo.save(order)
        self._order_repo.add_status_log(order, result.state)
        log.info("order.status_updated")
        return self._order_repo.get_by_id(order.id)

    @wrap_store_errors("Failed to update order.")
    @transaction.atomic
    def update_order(self, order_id: Any, dto: UpdateOrderDTO) -> Order:
        """Update amounts, methods, slot, arrival date or memo.

        A new billing amount is copied to the order's payment and a new
        slot to its shipments in the same transaction.

        Raises:
            NotFound: the order or a referenced row does not exist.
            TerminalStateViolation: the order is COMPLETED or CANCELED.
            ChildRecordLocked: the payment is past UNPAID or a shipment is
                past PREPARING.
        """
        order = self._order_repo.get_for_update(order_id)
        if order is None:
            raise NotFound("Order", order_id)
        if order.is_terminal:
            raise TerminalStateViolation("Order", order.id, order.status)

        if dto.payment_method_id is not None:
            order.payment_method = ensure_exists(
                self._payment_method_repo, "PaymentMethod", dto.payment_method_id
            )
        if dto.delivery_method_id is not None:
            order.delivery_method = ensure_exists(
                self._delivery_method_repo, "DeliveryMethod", dto.delivery_method_id
            )
        if dto.delivery_slot_id is not None:
            slot = ensure_exists(self._slot_repo, "DeliverySlot", dto.delivery_slot_id)
            if slot.id != order.delivery_slot_id:
                order.delivery_slot = slot
                self._apply_slot_to_shipments(order)
        if (
            dto.billing_amount is not None
            and dto.billing_amount != order.billing_amount
        ):
            self._apply_amount_to_payments(order, dto.billing_amount)
        for field in (
            "shipping_fee",
            "discount_amount",
            "billing_amount",
            "desired_arrival_date",
            "memo",
        ):
            value = getattr(dto, field)
            if value is not None:
                setattr(order, field, value)

        self._order_repo.save(order)
        logger.info("order.updated", order_id=str(order.id))
        return self._order_repo.get_by_id(order.id)

    def _apply_slot_to_shipments(self, order: Order) -> None:
        shipments = self._shipment_repo.list({"order_id": order.id})
        for shipment in shipments:
            if shipment.shipping_status != ShippingStatus.PREPARING:
                raise ChildRecordLocked(
                    "Shipment", shipment.id, shipment.shipping_status
                )
        for shipment in shipments:
            shipment.delivery_slot = order.delivery_slot
            self._shipment_repo.save(shipment)

    def _apply_amount_to_payments(self, order: Order, amount: Decimal) -> None:
        payments = self._payment_repo.list({"order_id": order.id})
        for payment in payments:
            if payment.payment_status != PaymentStatus.UNPAID:
                raise ChildRecordLocked(
                    "PaymentInfo", payment.id, payment.payment_status
                )
        for payment in payments:
            payment.payment_amount = amount
            self._payment_repo.save(payment)

    def can_delete(self, order: Order) -> GuardResult:
        """PENDING order, UNPAID payment and PREPARING shipments only."""
        if order.status != OrderStatus.PENDING:
            return GuardResult.deny(f"order is {order.status}")
        for payment in self._payment_repo.list({"order_id": order.id}):
            if payment.payment_status != PaymentStatus.UNPAID:
                return GuardResult.deny(f"payment is {payment.payment_status}")
        for shipment in self._shipment_repo.list({"order_id": order.id}):
            if shipment.shipping_status != ShippingStatus.PREPARING:
                return GuardResult.deny(f"shipment is {shipment.shipping_status}")
        return GuardResult.allow()

    @wrap_store_errors("Failed to delete order.")
    @transaction.atomic
    def delete_order(self, order_id: Any) -> None:
        """Delete a PENDING order with its items, payment and shipments.

        Shipping addresses no other shipment uses are deleted as well.

        Raises:
            NotFound: the order does not exist.
            DependencyConflict: the order is past PENDING, its payment is
                past UNPAID or a shipment is past PREPARING.
        """
        order = self._order_repo.get_for_update(order_id)
        if order is None:
            raise NotFound("Order", order_id)
        require_deletable("Order", order.id, self.can_delete(order))
        address_ids = {
            shipment.address_id
            for shipment in self._shipment_repo.list({"order_id": order.id})
        }
        self._order_repo.delete(order.id)
        for address_id in address_ids:
            address = self._address_repo.get_by_id(address_id)
            if address is not None and not self._address_repo.count_shipments(address):
                self._address_repo.delete(address_id)
        logger.info("order.deleted", order_id=str(order.id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        return self._order_repo.list(filters)

    def get_order(self, order_id: Any) -> Order:
        return ensure_exists(self._order_repo, "Order", order_id)

    def get_by_order_number(self, order_number: str) -> Order:
        order = self._order_repo.get_by_order_number(order_number)
        if order is None:
            raise NotFound("Order", order_number)
        return order

    def list_status_logs(self, order_id: Any) -> List[OrderStatusLog]:
        order = ensure_exists(self._order_repo, "Order", order_id)
        return self._order_repo.list_status_logs(order.id)
