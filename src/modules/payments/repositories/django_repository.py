"""Django ORM implementations of the payment repositories.

``PaymentInfo`` writes flush the aggregate's domain events to the
outbox inside the caller's transaction.
"""

from __future__ import annotations

from typing import Any, Optional

from django.db import models

from modules.core.repositories.django_repository import DjangoRepository
from modules.payments.models import PaymentInfo, PaymentMethod
from modules.payments.repositories.interfaces import (
    IPaymentInfoRepository,
    IPaymentMethodRepository,
)


class PaymentMethodDjangoRepository(
    DjangoRepository[PaymentMethod], IPaymentMethodRepository
):
    model = PaymentMethod

    def get_by_code(self, code: str) -> Optional[PaymentMethod]:
        return PaymentMethod.objects.filter(code=code).first()

    def count_orders(self, method: PaymentMethod) -> int:
        return method.orders.count()


class PaymentInfoDjangoRepository(DjangoRepository[PaymentInfo], IPaymentInfoRepository):
    model = PaymentInfo
    outbox_topic = "payments"

    def get_queryset(self) -> models.QuerySet:
        return PaymentInfo.objects.select_related("order", "site")

    def exists_for_order(self, order_id: Any) -> bool:
        return PaymentInfo.objects.filter(order_id=order_id).exists()

    def get_by_transaction_id(self, transaction_id: str) -> Optional[PaymentInfo]:
        if not transaction_id:
            return None
        return self.get_queryset().filter(transaction_id=transaction_id).first()
