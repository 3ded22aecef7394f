"""Site and Shop models.

A site is a sales channel; a shop belongs to exactly one site.  Both
codes are unique across the system.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.stores.constants import SiteStatus


class Site(BaseModel):
    code = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=255)
    status = models.CharField(
        max_length=20,
        choices=SiteStatus.choices,
        default=SiteStatus.ACTIVE,
    )

    class Meta:
        db_table = "sites"
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.code} ({self.name})"


class Shop(BaseModel):
    site = models.ForeignKey(
        "stores.Site",
        on_delete=models.PROTECT,
        related_name="shops",
    )
    name = models.CharField(max_length=255)
    code = models.CharField(max_length=50, unique=True)

    class Meta:
        db_table = "shops"
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.code} ({self.name})"
