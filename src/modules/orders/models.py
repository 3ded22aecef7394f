"""Order, OrderItem and OrderStatusLog models.

Business rules implemented:
- ``status`` only changes through ``OrderService``; COMPLETED and
  CANCELED are terminal.
- Every committed status change appends exactly one ``OrderStatusLog``.
- OrderItem snapshots the product code and name at creation time.
- Master data FKs use PROTECT so referenced rows cannot disappear.
- ``order_number`` is indexed but not unique.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel
from modules.orders.constants import (
    ORDER_NUMBER_PREFIX,
    TERMINAL_STATES,
    OrderStatus,
)
from shared.domain.events import DomainEventMixin


def _amount_field(**kwargs) -> models.DecimalField:
    return models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
        **kwargs,
    )


class Order(DomainEventMixin, BaseModel):
    """Order aggregate root.

    Children (items, payments, shipments, status logs) are created in the
    same transaction as the order and always point back to it.
    """

    order_number = models.CharField(max_length=20, db_index=True)
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    site = models.ForeignKey(
        "stores.Site",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    shop = models.ForeignKey(
        "stores.Shop",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    payment_method = models.ForeignKey(
        "payments.PaymentMethod",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    delivery_method = models.ForeignKey(
        "delivery.DeliveryMethod",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    delivery_slot = models.ForeignKey(
        "delivery.DeliverySlot",
        on_delete=models.PROTECT,
        related_name="orders",
        null=True,
        blank=True,
    )
    total_amount = _amount_field()
    shipping_fee = _amount_field()
    discount_amount = _amount_field()
    billing_amount = _amount_field()
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    order_date = models.DateTimeField(default=timezone.now)
    desired_arrival_date = models.DateField(null=True, blank=True)
    memo = models.TextField(blank=True, default="")

    class Meta:
        db_table = "orders"
        ordering = ["-order_date"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-order_date"], name="orders_order_date_idx"),
        ]

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATES

    @staticmethod
    def generate_order_number(now: Optional[datetime] = None) -> str:
        """Build ``ORDyymmdd`` plus the last six digits of epoch millis.

        The date part is taken in the configured local time zone.  The
        result is not checked for collisions.
        """
        now = now or timezone.now()
        local = timezone.localtime(now) if timezone.is_aware(now) else now
        millis = int(now.timestamp()) * 1000 + now.microsecond // 1000
        return f"{ORDER_NUMBER_PREFIX}{local:%y%m%d}{millis % 1_000_000:06d}"

    def __str__(self) -> str:
        return f"{self.order_number} ({self.status})"


class OrderItem(BaseModel):
    """Line item with a snapshot of the product at purchase time."""

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    category = models.ForeignKey(
        "products.Category",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    product_code = models.CharField(max_length=64)
    product_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    memo = models.TextField(blank=True, default="")

    class Meta:
        db_table = "order_items"
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    @property
    def subtotal(self) -> Decimal:
        return self.quantity * self.unit_price

    def __str__(self) -> str:
        return f"{self.product_code} x{self.quantity}"


class OrderStatusLog(BaseModel):
    """Append-only record of the statuses an order went through, newest first."""

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="status_logs",
    )
    status = models.CharField(max_length=20, choices=OrderStatus.choices)
    changed_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "order_status_logs"
        ordering = ["-changed_at", "-id"]
        indexes = [
            models.Index(
                fields=["order", "changed_at"],
                name="osl_order_changed_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order_id} -> {self.status}"
