"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  They are
the contract between the API layer (DRF serializers) and the Service
layer, and are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: one line of an order creation request.
- ``CreateOrderDTO``: order creation with items and shipping address.
- ``UpdateOrderDTO``: generic field update, status excluded.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.shipping.dtos import ShippingAddressDTO


class CreateOrderItemDTO(BaseModel):
    """One order line.  ``unit_price`` is the price agreed for this order."""

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int = Field(ge=1)
    unit_price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    memo: str = ""


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``items`` must contain at least one item.
    - Every amount is non-negative.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: UUID
    site_id: UUID
    shop_id: UUID
    payment_method_id: UUID
    delivery_method_id: UUID
    delivery_slot_id: Optional[UUID] = None
    shipping_address: ShippingAddressDTO
    items: List[CreateOrderItemDTO]
    total_amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    shipping_fee: Decimal = Field(
        default=Decimal("0.00"), ge=0, max_digits=12, decimal_places=2
    )
    discount_amount: Decimal = Field(
        default=Decimal("0.00"), ge=0, max_digits=12, decimal_places=2
    )
    billing_amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    desired_arrival_date: Optional[date] = None
    memo: str = ""

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v


class UpdateOrderDTO(BaseModel):
    """Generic field update.  The status is not part of it."""

    model_config = ConfigDict(frozen=True)

    payment_method_id: Optional[UUID] = None
    delivery_method_id: Optional[UUID] = None
    delivery_slot_id: Optional[UUID] = None
    shipping_fee: Optional[Decimal] = Field(default=None, ge=0)
    discount_amount: Optional[Decimal] = Field(default=None, ge=0)
    billing_amount: Optional[Decimal] = Field(default=None, ge=0)
    desired_arrival_date: Optional[date] = None
    memo: Optional[str] = None
