"""Order repository interface.

Extends ``IRepository[Order]`` with the order-number look-up and the
append-only status log.  The Service Layer depends on this contract.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderItem, OrderStatusLog


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Optional[Order]:
        """Most recent order carrying *order_number*."""

    @abstractmethod
    def add_item(self, item: OrderItem) -> OrderItem:
        """Insert a line item."""

    @abstractmethod
    def add_status_log(self, order: Order, status: str) -> OrderStatusLog:
        """Append a status log row.  Logs are never updated or deleted."""

    @abstractmethod
    def list_status_logs(self, order_id: Any) -> List[OrderStatusLog]:
        """Status logs of an order, newest first."""
