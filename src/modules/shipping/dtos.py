"""Shipping DTOs for the Service Layer (Pydantic v2, immutable)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ShippingAddressDTO(BaseModel):
    """Address payload, also embedded in order creation."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, max_length=255)
    postal_code: str = Field(min_length=1, max_length=20)
    prefecture: str = Field(min_length=1, max_length=100)
    address_line: str = Field(min_length=1, max_length=500)


class UpdateShippingAddressDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    postal_code: Optional[str] = Field(default=None, min_length=1, max_length=20)
    prefecture: Optional[str] = Field(default=None, min_length=1, max_length=100)
    address_line: Optional[str] = Field(default=None, min_length=1, max_length=500)


class CreateShipmentDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: UUID
    site_id: UUID
    shop_id: UUID
    address_id: UUID
    delivery_slot_id: Optional[UUID] = None
    tracking_number: str = ""
    shipped_at: Optional[datetime] = None


class UpdateShipmentDTO(BaseModel):
    """Generic field update.  The status is not part of it."""

    model_config = ConfigDict(frozen=True)

    address_id: Optional[UUID] = None
    delivery_slot_id: Optional[UUID] = None
    tracking_number: Optional[str] = None
    shipped_at: Optional[datetime] = None
