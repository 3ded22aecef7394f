"""Payment repository interfaces."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.payments.models import PaymentInfo, PaymentMethod


class IPaymentMethodRepository(IRepository["PaymentMethod"]):
    @abstractmethod
    def get_by_code(self, code: str) -> Optional[PaymentMethod]:
        """Retrieve a payment method by its unique code."""

    @abstractmethod
    def count_orders(self, method: PaymentMethod) -> int:
        """Number of orders paid with *method*."""


class IPaymentInfoRepository(IRepository["PaymentInfo"]):
    @abstractmethod
    def exists_for_order(self, order_id: Any) -> bool:
        """Whether the order already has a payment record."""

    @abstractmethod
    def get_by_transaction_id(self, transaction_id: str) -> Optional[PaymentInfo]:
        """Retrieve a payment by the gateway transaction id."""
