"""Payment DTOs for the Service Layer (Pydantic v2, immutable)."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from modules.payments.constants import PaymentStatus


class CreatePaymentMethodDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, max_length=255)
    code: str = Field(min_length=1, max_length=50)
    active: bool = True


class UpdatePaymentMethodDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    active: Optional[bool] = None


class CreatePaymentInfoDTO(BaseModel):
    """Payment recorded independently of order creation."""

    model_config = ConfigDict(frozen=True)

    order_id: UUID
    site_id: UUID
    payment_amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    transaction_id: str = ""


class UpdatePaymentInfoDTO(BaseModel):
    """Generic field update.  The status is not part of it."""

    model_config = ConfigDict(frozen=True)

    site_id: Optional[UUID] = None
    payment_amount: Optional[Decimal] = Field(default=None, ge=0)
    transaction_id: Optional[str] = None


class UpdatePaymentStatusDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: PaymentStatus
    transaction_id: Optional[str] = None
