"""Django ORM implementation of the Order repository.

Reads join every master-data row an order response shows and prefetch
the children, so a single ``get_by_id`` returns the full aggregate.
"""

from __future__ import annotations

from typing import Any, List, Optional

import structlog
from django.db import models

from modules.core.repositories.django_repository import DjangoRepository
from modules.orders.models import Order, OrderItem, OrderStatusLog
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(DjangoRepository[Order], IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    model = Order
    outbox_topic = "orders"

    def get_queryset(self) -> models.QuerySet:
        return Order.objects.select_related(
            "customer",
            "site",
            "shop",
            "payment_method",
            "delivery_method",
            "delivery_slot",
        ).prefetch_related(
            "items__product",
            "items__category",
            "payments",
            "shipments__address",
            "status_logs",
        )

    def get_by_order_number(self, order_number: str) -> Optional[Order]:
        return (
            self.get_queryset()
            .filter(order_number=order_number)
            .order_by("-order_date")
            .first()
        )

    def add_item(self, item: OrderItem) -> OrderItem:
        item.save()
        return item

    def add_status_log(self, order: Order, status: str) -> OrderStatusLog:
        log = OrderStatusLog.objects.create(order=order, status=status)
        logger.info("order.status_logged", order_id=str(order.id), status=status)
        return log

    def list_status_logs(self, order_id: Any) -> List[OrderStatusLog]:
        return list(OrderStatusLog.objects.filter(order_id=order_id))
