"""Site and Shop service layer.

Business rules enforced here:
- Site and shop codes are unique across the system.
- A shop must reference an existing site.
- A site with orders or shops, and a shop with orders or shipments,
  cannot be deleted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.exceptions import NotFound, wrap_store_errors
from modules.core.guards import (
    GuardResult,
    assert_unique,
    ensure_exists,
    require_deletable,
)
from modules.stores.models import Shop, Site

if TYPE_CHECKING:
    from modules.stores.dtos import (
        CreateShopDTO,
        CreateSiteDTO,
        UpdateShopDTO,
        UpdateSiteDTO,
    )
    from modules.stores.repositories.interfaces import (
        IShopRepository,
        ISiteRepository,
    )

logger = structlog.get_logger(__name__)


class SiteService:
    """Application service for Site use-cases."""

    def __init__(self, site_repository: ISiteRepository) -> None:
        self._site_repo = site_repository

    @wrap_store_errors("Failed to create site.")
    @transaction.atomic
    def create_site(self, dto: CreateSiteDTO) -> Site:
        assert_unique("Site", dto.code, self._site_repo.get_by_code(dto.code))
        site = self._site_repo.save(
            Site(code=dto.code, name=dto.name, status=dto.status)
        )
        logger.info("site.created", site_id=str(site.id), code=site.code)
        return site

    @wrap_store_errors("Failed to update site.")
    @transaction.atomic
    def update_site(self, id: Any, dto: UpdateSiteDTO) -> Site:
        site = ensure_exists(self._site_repo, "Site", id)
        if dto.code is not None:
            assert_unique(
                "Site",
                dto.code,
                self._site_repo.get_by_code(dto.code),
                excluding_id=site.id,
            )
        for field, value in dto.model_dump(exclude_none=True).items():
            setattr(site, field, value)
        site = self._site_repo.save(site)
        logger.info("site.updated", site_id=str(site.id))
        return site

    def can_delete(self, site: Site) -> GuardResult:
        counts = self._site_repo.dependent_counts(site)
        if counts["orders"]:
            return GuardResult.deny("site has orders")
        if counts["shops"]:
            return GuardResult.deny("site has shops")
        return GuardResult.allow()

    @wrap_store_errors("Failed to delete site.")
    @transaction.atomic
    def delete_site(self, id: Any) -> None:
        site = ensure_exists(self._site_repo, "Site", id)
        require_deletable("Site", site.id, self.can_delete(site))
        self._site_repo.delete(site.id)
        logger.info("site.deleted", site_id=str(site.id))

    def list_sites(self, filters: Optional[Dict[str, Any]] = None) -> List[Site]:
        return self._site_repo.list(filters)

    def get_site(self, id: Any) -> Site:
        return ensure_exists(self._site_repo, "Site", id)

    def get_by_code(self, code: str) -> Site:
        site = self._site_repo.get_by_code(code)
        if site is None:
            raise NotFound("Site", code)
        return site


class ShopService:
    """Application service for Shop use-cases."""

    def __init__(
        self,
        shop_repository: IShopRepository,
        site_repository: ISiteRepository,
    ) -> None:
        self._shop_repo = shop_repository
        self._site_repo = site_repository

    @wrap_store_errors("Failed to create shop.")
    @transaction.atomic
    def create_shop(self, dto: CreateShopDTO) -> Shop:
        """Create a shop under an existing site.

        Raises:
            NotFound: the site does not exist.
            UniquenessConflict: the shop code is taken.
        """
        site = ensure_exists(self._site_repo, "Site", dto.site_id)
        assert_unique("Shop", dto.code, self._shop_repo.get_by_code(dto.code))
        shop = self._shop_repo.save(Shop(site=site, code=dto.code, name=dto.name))
        logger.info("shop.created", shop_id=str(shop.id), site_id=str(site.id))
        return shop

    @wrap_store_errors("Failed to update shop.")
    @transaction.atomic
    def update_shop(self, id: Any, dto: UpdateShopDTO) -> Shop:
        shop = ensure_exists(self._shop_repo, "Shop", id)
        if dto.site_id is not None:
            shop.site = ensure_exists(self._site_repo, "Site", dto.site_id)
        if dto.code is not None:
            assert_unique(
                "Shop",
                dto.code,
                self._shop_repo.get_by_code(dto.code),
                excluding_id=shop.id,
            )
            shop.code = dto.code
        if dto.name is not None:
            shop.name = dto.name
        shop = self._shop_repo.save(shop)
        logger.info("shop.updated", shop_id=str(shop.id))
        return shop

    def can_delete(self, shop: Shop) -> GuardResult:
        counts = self._shop_repo.dependent_counts(shop)
        if counts["orders"]:
            return GuardResult.deny("shop has orders")
        if counts["shipments"]:
            return GuardResult.deny("shop has shipments")
        return GuardResult.allow()

    @wrap_store_errors("Failed to delete shop.")
    @transaction.atomic
    def delete_shop(self, id: Any) -> None:
        """Raises ``DependencyConflict`` while orders or shipments exist."""
        shop = ensure_exists(self._shop_repo, "Shop", id)
        require_deletable("Shop", shop.id, self.can_delete(shop))
        self._shop_repo.delete(shop.id)
        logger.info("shop.deleted", shop_id=str(shop.id))

    def list_shops(self, filters: Optional[Dict[str, Any]] = None) -> List[Shop]:
        return self._shop_repo.list(filters)

    def get_shop(self, id: Any) -> Shop:
        return ensure_exists(self._shop_repo, "Shop", id)

    def get_by_code(self, code: str) -> Shop:
        shop = self._shop_repo.get_by_code(code)
        if shop is None:
            raise NotFound("Shop", code)
        return shop
