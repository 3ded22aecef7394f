"""Product catalogue service layer (Use Cases).

Business rules enforced here:
- Category names and product codes are unique.
- A product must reference an existing category.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.exceptions import NotFound, wrap_store_errors
from modules.core.guards import assert_unique, ensure_exists
from modules.products.models import Category, Product

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateCategoryDTO,
        CreateProductDTO,
        UpdateProductDTO,
    )
    from modules.products.repositories.interfaces import (
        ICategoryRepository,
        IProductRepository,
    )

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for the product catalogue.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IProductRepository,
        category_repository: ICategoryRepository,
    ) -> None:
        self._repo = repository
        self._category_repo = category_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @wrap_store_errors("Failed to create category.")
    @transaction.atomic
    def create_category(self, dto: CreateCategoryDTO) -> Category:
        assert_unique("Category", dto.name, self._category_repo.get_by_name(dto.name))
        category = self._category_repo.save(Category(name=dto.name))
        logger.info("category.created", category_id=str(category.id))
        return category

    @wrap_store_errors("Failed to create product.")
    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a new product.

        Raises:
            UniquenessConflict: the code is already taken.
            NotFound: the category does not exist.
        """
        log = logger.bind(code=dto.code)
        assert_unique("Product", dto.code, self._repo.get_by_code(dto.code))
        category = ensure_exists(self._category_repo, "Category", dto.category_id)

        product = Product(
            code=dto.code,
            name=dto.name,
            category=category,
            retail_price=dto.retail_price,
            purchase_price=dto.purchase_price,
        )
        product = self._repo.save(product)
        log.info("product.created", product_id=str(product.id))
        return product

    @wrap_store_errors("Failed to update product.")
    @transaction.atomic
    def update_product(self, id: Any, dto: UpdateProductDTO) -> Product:
        """Update the supplied fields of a product.

        Prices already copied onto order items are snapshots and do not
        change.
        """
        product = ensure_exists(self._repo, "Product", id)
        log = logger.bind(product_id=str(product.id))

        if dto.code is not None:
            assert_unique(
                "Product",
                dto.code,
                self._repo.get_by_code(dto.code),
                excluding_id=product.id,
            )
            product.code = dto.code
        if dto.category_id is not None:
            product.category = ensure_exists(
                self._category_repo, "Category", dto.category_id
            )
        for field in ("name", "retail_price", "purchase_price"):
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)

        product = self._repo.save(product)
        log.info("product.updated")
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        return self._repo.list(filters)

    def list_categories(self) -> List[Category]:
        return self._category_repo.list()

    def get_product(self, id: Any) -> Product:
        return ensure_exists(self._repo, "Product", id)

    def get_by_code(self, code: str) -> Product:
        product = self._repo.get_by_code(code)
        if product is None:
            raise NotFound("Product", code)
        return product
