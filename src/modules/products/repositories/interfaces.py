"""Product catalogue repository interfaces."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Category, Product


class ICategoryRepository(IRepository["Category"]):
    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Category]:
        """Retrieve a category by its unique name (case-insensitive)."""


class IProductRepository(IRepository["Product"]):
    @abstractmethod
    def get_by_code(self, code: str) -> Optional[Product]:
        """Retrieve a product by code (case-insensitive)."""
