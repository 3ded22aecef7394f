"""Django ORM implementations of the catalogue repositories."""

from __future__ import annotations

from typing import Optional

from django.db import models

from modules.core.repositories.django_repository import DjangoRepository
from modules.products.models import Category, Product
from modules.products.repositories.interfaces import (
    ICategoryRepository,
    IProductRepository,
)


class CategoryDjangoRepository(DjangoRepository[Category], ICategoryRepository):
    model = Category

    def get_by_name(self, name: str) -> Optional[Category]:
        return Category.objects.filter(name__iexact=name.strip()).first()


class ProductDjangoRepository(DjangoRepository[Product], IProductRepository):
    model = Product

    def get_queryset(self) -> models.QuerySet:
        return Product.objects.select_related("category")

    def get_by_code(self, code: str) -> Optional[Product]:
        return self.get_queryset().filter(code=code.strip().upper()).first()
