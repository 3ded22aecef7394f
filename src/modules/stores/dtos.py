"""Site and Shop DTOs (Pydantic v2, immutable)."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from modules.stores.constants import SiteStatus


class CreateSiteDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    status: SiteStatus = SiteStatus.ACTIVE


class UpdateSiteDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    status: Optional[SiteStatus] = None


class CreateShopDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    site_id: UUID
    code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)


class UpdateShopDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    site_id: Optional[UUID] = None
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
