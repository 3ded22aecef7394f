"""Catalogue API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.products.dtos import CreateCategoryDTO, CreateProductDTO, UpdateProductDTO
from modules.products.filters import ProductFilter
from modules.products.models import Category, Product
from modules.products.repositories.django_repository import (
    CategoryDjangoRepository,
    ProductDjangoRepository,
)
from modules.products.serializers import (
    CategoryInputSerializer,
    CategorySerializer,
    ProductInputSerializer,
    ProductSerializer,
)
from modules.products.services import ProductService


def _product_service() -> ProductService:
    return ProductService(
        repository=ProductDjangoRepository(),
        category_repository=CategoryDjangoRepository(),
    )


class CategoryViewSet(ListModelMixin, GenericViewSet):
    queryset = Category.objects.all()
    serializer_class = CategorySerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _product_service()

    def create(self, request: Request) -> Response:
        serializer = CategoryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = self._service.create_category(
            CreateCategoryDTO(**serializer.validated_data)
        )
        return Response(
            CategorySerializer(category).data, status=status.HTTP_201_CREATED
        )


class ProductViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for the product catalogue.

    Writes go through ``ProductService``; list filtering (name, code,
    category, price range) is handled by ``ProductFilter``.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    filterset_class = ProductFilter
    search_fields = ["name", "code"]
    ordering_fields = ["name", "code", "retail_price", "created_at"]
    ordering = ["name"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _product_service()

    def get_queryset(self):
        return ProductDjangoRepository().get_queryset()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return Response(ProductSerializer(self._service.get_product(pk)).data)

    def create(self, request: Request) -> Response:
        serializer = ProductInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = self._service.create_product(
            CreateProductDTO(**serializer.validated_data)
        )
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        serializer = ProductInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        product = self._service.update_product(
            pk, UpdateProductDTO(**serializer.validated_data)
        )
        return Response(ProductSerializer(product).data)

    @action(detail=False, methods=["get"], url_path=r"by-code/(?P<code>[^/]+)")
    def by_code(self, request: Request, code: str) -> Response:
        return Response(ProductSerializer(self._service.get_by_code(code)).data)
