"""Site and Shop API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.stores.dtos import CreateShopDTO, CreateSiteDTO, UpdateShopDTO, UpdateSiteDTO
from modules.stores.filters import ShopFilter, SiteFilter
from modules.stores.models import Shop, Site
from modules.stores.repositories.django_repository import (
    ShopDjangoRepository,
    SiteDjangoRepository,
)
from modules.stores.serializers import (
    ShopInputSerializer,
    ShopSerializer,
    SiteInputSerializer,
    SiteSerializer,
)
from modules.stores.services import ShopService, SiteService


class SiteViewSet(ListModelMixin, GenericViewSet):
    queryset = Site.objects.all()
    serializer_class = SiteSerializer
    filterset_class = SiteFilter
    search_fields = ["code", "name"]
    ordering_fields = ["name", "code", "created_at"]
    ordering = ["name"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = SiteService(site_repository=SiteDjangoRepository())

    def get_queryset(self):
        return SiteDjangoRepository().get_queryset()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return Response(SiteSerializer(self._service.get_site(pk)).data)

    def create(self, request: Request) -> Response:
        serializer = SiteInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        site = self._service.create_site(CreateSiteDTO(**serializer.validated_data))
        return Response(SiteSerializer(site).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        serializer = SiteInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        site = self._service.update_site(pk, UpdateSiteDTO(**serializer.validated_data))
        return Response(SiteSerializer(site).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        self._service.delete_site(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path=r"by-code/(?P<code>[^/]+)")
    def by_code(self, request: Request, code: str) -> Response:
        """GET /api/v1/sites/by-code/{code}/"""
        return Response(SiteSerializer(self._service.get_by_code(code)).data)


class ShopViewSet(ListModelMixin, GenericViewSet):
    queryset = Shop.objects.all()
    serializer_class = ShopSerializer
    filterset_class = ShopFilter
    search_fields = ["code", "name"]
    ordering_fields = ["name", "code", "created_at"]
    ordering = ["name"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ShopService(
            shop_repository=ShopDjangoRepository(),
            site_repository=SiteDjangoRepository(),
        )

    def get_queryset(self):
        return ShopDjangoRepository().get_queryset()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return Response(ShopSerializer(self._service.get_shop(pk)).data)

    def create(self, request: Request) -> Response:
        serializer = ShopInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        shop = self._service.create_shop(CreateShopDTO(**serializer.validated_data))
        return Response(ShopSerializer(shop).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        serializer = ShopInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        shop = self._service.update_shop(pk, UpdateShopDTO(**serializer.validated_data))
        return Response(ShopSerializer(shop).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/shops/{pk}/. 409 while orders or shipments exist."""
        self._service.delete_shop(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path=r"by-code/(?P<code>[^/]+)")
    def by_code(self, request: Request, code: str) -> Response:
        return Response(ShopSerializer(self._service.get_by_code(code)).data)
