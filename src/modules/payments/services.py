"""Payment service layer (Use Cases).

Business rules enforced:
- Payment method codes are unique; a method used by orders cannot be
  deleted.
- At most one PaymentInfo per order.
- Status moves along ``PAYMENT_STATE_MACHINE``.  REFUNDED is reached only
  through ``refund`` and freezes the record.
- Entering AUTHORIZED or PAID stamps ``payment_date``.
- Only UNPAID payments can be deleted.
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
from modules.core.guards import (
    GuardResult,
    assert_unique,
    ensure_exists,
    require_deletable,
)
from modules.payments.constants import (
    PAYMENT_STATE_MACHINE,
    SETTLEMENT_STATES,
    PaymentStatus,
)
from modules.payments.events import PaymentRefunded, PaymentStatusChanged
from modules.payments.exceptions import InvalidStateForRefund, PaymentAlreadyExists
from modules.payments.models import PaymentInfo, PaymentMethod
from shared.domain.state_machine import Rejection

if TYPE_CHECKING:
    from modules.core.repositories.interfaces import IRepository
    from modules.payments.dtos import (
        CreatePaymentInfoDTO,
        CreatePaymentMethodDTO,
        UpdatePaymentInfoDTO,
        UpdatePaymentMethodDTO,
    )
    from modules.payments.repositories.interfaces import (
        IPaymentInfoRepository,
        IPaymentMethodRepository,
    )
    from modules.stores.repositories.interfaces import ISiteRepository

logger = structlog.get_logger(__name__)


class PaymentMethodService:
    """Application service for PaymentMethod use-cases."""

    def __init__(self, repository: IPaymentMethodRepository) -> None:
        self._repo = repository

    @wrap_store_errors("Failed to create payment method.")
    @transaction.atomic
    def create_method(self, dto: CreatePaymentMethodDTO) -> PaymentMethod:
        assert_unique("PaymentMethod", dto.code, self._repo.get_by_code(dto.code))
        method = self._repo.save(
            PaymentMethod(name=dto.name, code=dto.code, active=dto.active)
        )
        logger.info("payment_method.created", payment_method_id=str(method.id))
        return method

    @wrap_store_errors("Failed to update payment method.")
    @transaction.atomic
    def update_method(self, id: Any, dto: UpdatePaymentMethodDTO) -> PaymentMethod:
        method = ensure_exists(self._repo, "PaymentMethod", id)
        if dto.code is not None:
            assert_unique(
                "PaymentMethod",
                dto.code,
                self._repo.get_by_code(dto.code),
                excluding_id=method.id,
            )
        for field, value in dto.model_dump(exclude_none=True).items():
            setattr(method, field, value)
        method = self._repo.save(method)
        logger.info("payment_method.updated", payment_method_id=str(method.id))
        return method

    @wrap_store_errors("Failed to toggle payment method.")
    @transaction.atomic
    def toggle_status(self, id: Any) -> PaymentMethod:
        """Flip ``active`` under a row lock."""
        method = self._repo.get_for_update(id)
        if method is None:
            raise NotFound("PaymentMethod", id)
        method.active = not method.active
        method = self._repo.save(method)
        logger.info(
            "payment_method.toggled",
            payment_method_id=str(method.id),
            active=method.active,
        )
        return method

    def can_delete(self, method: PaymentMethod) -> GuardResult:
        if self._repo.count_orders(method):
            return GuardResult.deny("payment method is used by orders")
        return GuardResult.allow()

    @wrap_store_errors("Failed to delete payment method.")
    @transaction.atomic
    def delete_method(self, id: Any) -> None:
        method = ensure_exists(self._repo, "PaymentMethod", id)
        require_deletable("PaymentMethod", method.id, self.can_delete(method))
        self._repo.delete(method.id)
        logger.info("payment_method.deleted", payment_method_id=str(method.id))

    def list_methods(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[PaymentMethod]:
        return self._repo.list(filters)

    def get_method(self, id: Any) -> PaymentMethod:
        return ensure_exists(self._repo, "PaymentMethod", id)

    def get_by_code(self, code: str) -> PaymentMethod:
        method = self._repo.get_by_code(code)
        if method is None:
            raise NotFound("PaymentMethod", code)
        return method


class PaymentInfoService:
    """Application service for the payment record of an order.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IPaymentInfoRepository,
        order_repository: IRepository,
        site_repository: ISiteRepository,
    ) -> None:
        self._repo = repository
        self._order_repo = order_repository
        self._site_repo = site_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @wrap_store_errors("Failed to create payment information.")
    @transaction.atomic
    def create_payment(self, dto: CreatePaymentInfoDTO) -> PaymentInfo:
        """Record the payment of an order created without one.

        Raises:
            NotFound: the order or site does not exist.
            PaymentAlreadyExists: the order already has a payment.
        """
        order = ensure_exists(self._order_repo, "Order", dto.order_id)
        site = ensure_exists(self._site_repo, "Site", dto.site_id)
        if self._repo.exists_for_order(order.id):
            raise PaymentAlreadyExists(order.id)

        payment = PaymentInfo(
            order=order,
            site=site,
            payment_amount=dto.payment_amount,
            transaction_id=dto.transaction_id,
        )
        payment = self._repo.save(payment)
        logger.info(
            "payment.created", payment_id=str(payment.id), order_id=str(order.id)
        )
        return payment

    @wrap_store_errors("Failed to update payment status.")
    @transaction.atomic
    def update_status(
        self,
        payment_id: Any,
        new_status: str,
        transaction_id: Optional[str] = None,
    ) -> PaymentInfo:
        """Move a payment along its status graph.

        The row is re-read under ``SELECT FOR UPDATE`` before the
        transition is validated.

        Raises:
            NotFound: the payment does not exist.
            TerminalStateViolation: the payment is REFUNDED.
            InvalidTransition: the edge does not exist, or the target is
                REFUNDED (use ``refund``).
        """
        payment = self._repo.get_for_update(payment_id)
        if payment is None:
            raise NotFound("PaymentInfo", payment_id)

        log = logger.bind(
            payment_id=str(payment.id),
            current_status=payment.payment_status,
            new_status=new_status,
        )
        result = PAYMENT_STATE_MACHINE.transition(payment.payment_status, new_status)
        if result.rejection == Rejection.TERMINAL:
            log.warning("payment.terminal_state")
            raise TerminalStateViolation(
                "PaymentInfo", payment.id, payment.payment_status
            )
        if result.requested == PaymentStatus.REFUNDED:
            log.warning("payment.invalid_transition")
            raise InvalidTransition(
                "PaymentInfo",
                result.current,
                result.requested,
                message="Refunds must go through the refund operation.",
            )
        if not result.accepted:
            log.warning("payment.invalid_transition")
            raise InvalidTransition("PaymentInfo", result.current, result.requested)

        old_status = payment.payment_status
        payment.payment_status = result.state
        if result.state in SETTLEMENT_STATES:
            payment.payment_date = timezone.now()
            if transaction_id:
                payment.transaction_id = transaction_id
        payment.add_domain_event(
            PaymentStatusChanged(
                aggregate_id=payment.id,
                order_id=str(payment.order_id),
                old_status=old_status,
                new_status=result.state,
            )
        )
        payment = self._repo.save(payment)
        log.info("payment.status_updated")
        return payment

    @wrap_store_errors("Failed to refund payment.")
    @transaction.atomic
    def refund(self, payment_id: Any) -> PaymentInfo:
        """Refund a PAID payment.

        Raises:
            NotFound: the payment does not exist.
            InvalidStateForRefund: the payment is not PAID.
        """
        payment = self._repo.get_for_update(payment_id)
        if payment is None:
            raise NotFound("PaymentInfo", payment_id)

        result = PAYMENT_STATE_MACHINE.transition(
            payment.payment_status, PaymentStatus.REFUNDED
        )
        if not result.accepted:
            logger.warning(
                "payment.refund_rejected",
                payment_id=str(payment.id),
                current_status=payment.payment_status,
            )
            raise InvalidStateForRefund(payment.id, payment.payment_status)

        payment.payment_status = PaymentStatus.REFUNDED
        payment.add_domain_event(
            PaymentRefunded(
                aggregate_id=payment.id,
                order_id=str(payment.order_id),
                amount=str(payment.payment_amount),
            )
        )
        payment = self._repo.save(payment)
        logger.info("payment.refunded", payment_id=str(payment.id))
        return payment

    @wrap_store_errors("Failed to update payment information.")
    @transaction.atomic
    def update_payment(self, payment_id: Any, dto: UpdatePaymentInfoDTO) -> PaymentInfo:
        """Update amount, transaction id or site of a non-refunded payment."""
        payment = self._repo.get_for_update(payment_id)
        if payment is None:
            raise NotFound("PaymentInfo", payment_id)
        if payment.is_terminal:
            raise TerminalStateViolation(
                "PaymentInfo", payment.id, payment.payment_status
            )

        if dto.site_id is not None:
            payment.site = ensure_exists(self._site_repo, "Site", dto.site_id)
        if dto.payment_amount is not None:
            payment.payment_amount = dto.payment_amount
        if dto.transaction_id is not None:
            payment.transaction_id = dto.transaction_id

        payment = self._repo.save(payment)
        logger.info("payment.updated", payment_id=str(payment.id))
        return payment

    def can_delete(self, payment: PaymentInfo) -> GuardResult:
        if payment.payment_status != PaymentStatus.UNPAID:
            return GuardResult.deny(f"payment is {payment.payment_status}")
        return GuardResult.allow()

    @wrap_store_errors("Failed to delete payment information.")
    @transaction.atomic
    def delete_payment(self, payment_id: Any) -> None:
        """Raises ``DependencyConflict`` unless the payment is UNPAID."""
        payment = self._repo.get_for_update(payment_id)
        if payment is None:
            raise NotFound("PaymentInfo", payment_id)
        require_deletable("PaymentInfo", payment.id, self.can_delete(payment))
        self._repo.delete(payment.id)
        logger.info("payment.deleted", payment_id=str(payment.id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_payments(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[PaymentInfo]:
        return self._repo.list(filters)

    def get_payment(self, payment_id: Any) -> PaymentInfo:
        return ensure_exists(self._repo, "PaymentInfo", payment_id)

    def get_by_transaction_id(self, transaction_id: str) -> PaymentInfo:
        payment = self._repo.get_by_transaction_id(transaction_id)
        if payment is None:
            raise NotFound("PaymentInfo", transaction_id)
        return payment
