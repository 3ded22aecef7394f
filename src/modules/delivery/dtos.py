"""Delivery DTOs for the Service Layer (Pydantic v2, immutable)."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from modules.delivery.constants import DeliveryMethodType


class CreateDeliveryMethodDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, max_length=255)
    code: str = Field(min_length=1, max_length=50)
    type: DeliveryMethodType = DeliveryMethodType.STANDARD


class UpdateDeliveryMethodDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    type: Optional[DeliveryMethodType] = None


class CreateDeliverySlotDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    delivery_method_id: UUID
    name: str = Field(min_length=1, max_length=255)
    code: str = Field(min_length=1, max_length=50)


class UpdateDeliverySlotDTO(BaseModel):
    """Rename and/or reparent a slot."""

    model_config = ConfigDict(frozen=True)

    delivery_method_id: Optional[UUID] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
