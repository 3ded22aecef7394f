"""PaymentMethod and PaymentInfo models.

Business rules implemented:
- Payment method codes are unique.
- At most one PaymentInfo per order (checked by the service before
  creation).
- ``payment_status`` only changes through ``PaymentInfoService``.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.payments.constants import TERMINAL_STATES, PaymentStatus
from shared.domain.events import DomainEventMixin


class PaymentMethod(BaseModel):
    name = models.CharField(max_length=255)
    code = models.CharField(max_length=50, unique=True)
    active = models.BooleanField(default=True)

    class Meta:
        db_table = "payment_methods"
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.code} ({self.name})"


class PaymentInfo(DomainEventMixin, BaseModel):
    """Payment record of an order.

    ``payment_date`` is stamped when the payment becomes AUTHORIZED or
    PAID.  REFUNDED is terminal.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="payments",
    )
    site = models.ForeignKey(
        "stores.Site",
        on_delete=models.PROTECT,
        related_name="payments",
    )
    payment_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID,
    )
    transaction_id = models.CharField(max_length=255, blank=True, default="")
    payment_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "payment_info"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["payment_status"], name="payment_status_idx"),
            models.Index(fields=["transaction_id"], name="payment_txn_idx"),
        ]

    @property
    def is_terminal(self) -> bool:
        return self.payment_status in TERMINAL_STATES

    def __str__(self) -> str:
        return f"Payment {self.id} ({self.payment_status})"
