"""Django ORM implementations of the Site and Shop repositories."""

from __future__ import annotations

from typing import Dict, Optional

from django.db import models

from modules.core.repositories.django_repository import DjangoRepository
from modules.stores.models import Shop, Site
from modules.stores.repositories.interfaces import IShopRepository, ISiteRepository


class SiteDjangoRepository(DjangoRepository[Site], ISiteRepository):
    model = Site

    def get_by_code(self, code: str) -> Optional[Site]:
        return Site.objects.filter(code=code).first()

    def dependent_counts(self, site: Site) -> Dict[str, int]:
        return {"orders": site.orders.count(), "shops": site.shops.count()}


class ShopDjangoRepository(DjangoRepository[Shop], IShopRepository):
    model = Shop

    def get_queryset(self) -> models.QuerySet:
        return Shop.objects.select_related("site")

    def get_by_code(self, code: str) -> Optional[Shop]:
        return self.get_queryset().filter(code=code).first()

    def dependent_counts(self, shop: Shop) -> Dict[str, int]:
        return {"orders": shop.orders.count(), "shipments": shop.shipments.count()}
