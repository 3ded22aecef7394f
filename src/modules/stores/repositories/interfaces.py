"""Site and Shop repository interfaces."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.stores.models import Shop, Site


class ISiteRepository(IRepository["Site"]):
    @abstractmethod
    def get_by_code(self, code: str) -> Optional[Site]:
        """Retrieve a site by its unique code."""

    @abstractmethod
    def dependent_counts(self, site: Site) -> Dict[str, int]:
        """Number of orders and shops that reference *site*."""


class IShopRepository(IRepository["Shop"]):
    @abstractmethod
    def get_by_code(self, code: str) -> Optional[Shop]:
        """Retrieve a shop by its unique code."""

    @abstractmethod
    def dependent_counts(self, shop: Shop) -> Dict[str, int]:
        """Number of orders and shipments that reference *shop*."""
