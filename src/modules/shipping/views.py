"""Shipping API views.

Status changes are a dedicated action; the generic PATCH never touches
``shipping_status``.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.delivery.repositories.django_repository import DeliverySlotDjangoRepository
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.shipping.dtos import (
    CreateShipmentDTO,
    ShippingAddressDTO,
    UpdateShipmentDTO,
    UpdateShippingAddressDTO,
)
from modules.shipping.filters import ShipmentFilter, ShippingAddressFilter
from modules.shipping.models import Shipment, ShippingAddress
from modules.shipping.repositories.django_repository import (
    ShipmentDjangoRepository,
    ShippingAddressDjangoRepository,
)
from modules.shipping.serializers import (
    ShipmentInputSerializer,
    ShipmentSerializer,
    ShipmentStatusSerializer,
    ShipmentUpdateSerializer,
    ShippingAddressInputSerializer,
    ShippingAddressSerializer,
)
from modules.shipping.services import ShipmentService, ShippingAddressService
from modules.stores.repositories.django_repository import (
    ShopDjangoRepository,
    SiteDjangoRepository,
)


class ShippingAddressViewSet(ListModelMixin, GenericViewSet):
    queryset = ShippingAddress.objects.all()
    serializer_class = ShippingAddressSerializer
    filterset_class = ShippingAddressFilter
    search_fields = ["name", "prefecture", "address_line", "postal_code"]
    ordering_fields = ["prefecture", "name", "created_at"]
    ordering = ["prefecture", "name"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ShippingAddressService(
            repository=ShippingAddressDjangoRepository()
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return Response(ShippingAddressSerializer(self._service.get_address(pk)).data)

    def create(self, request: Request) -> Response:
        serializer = ShippingAddressInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        address = self._service.create_address(
            ShippingAddressDTO(**serializer.validated_data)
        )
        return Response(
            ShippingAddressSerializer(address).data, status=status.HTTP_201_CREATED
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        serializer = ShippingAddressInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        address = self._service.update_address(
            pk, UpdateShippingAddressDTO(**serializer.validated_data)
        )
        return Response(ShippingAddressSerializer(address).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        self._service.delete_address(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def prefectures(self, request: Request) -> Response:
        """GET /api/v1/shipping-addresses/prefectures/"""
        return Response(self._service.list_prefectures())


class ShipmentViewSet(ListModelMixin, GenericViewSet):
    queryset = Shipment.objects.all()
    serializer_class = ShipmentSerializer
    filterset_class = ShipmentFilter
    search_fields = ["tracking_number"]
    ordering_fields = ["created_at", "shipped_at", "shipping_status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ShipmentService(
            repository=ShipmentDjangoRepository(),
            order_repository=OrderDjangoRepository(),
            site_repository=SiteDjangoRepository(),
            shop_repository=ShopDjangoRepository(),
            address_repository=ShippingAddressDjangoRepository(),
            slot_repository=DeliverySlotDjangoRepository(),
        )

    def get_queryset(self):
        return ShipmentDjangoRepository().get_queryset()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return Response(ShipmentSerializer(self._service.get_shipment(pk)).data)

    def create(self, request: Request) -> Response:
        serializer = ShipmentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        shipment = self._service.create_shipment(
            CreateShipmentDTO(**serializer.validated_data)
        )
        return Response(
            ShipmentSerializer(shipment).data, status=status.HTTP_201_CREATED
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        serializer = ShipmentUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        shipment = self._service.update_shipment(
            pk, UpdateShipmentDTO(**serializer.validated_data)
        )
        return Response(ShipmentSerializer(shipment).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        self._service.delete_shipment(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="status")
    def change_status(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/shipments/{pk}/status/"""
        serializer = ShipmentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        shipment = self._service.update_status(
            pk, data["status"], tracking_number=data.get("tracking_number")
        )
        return Response(ShipmentSerializer(shipment).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"by-tracking/(?P<tracking_number>[^/]+)",
    )
    def by_tracking(self, request: Request, tracking_number: str) -> Response:
        shipment = self._service.get_by_tracking_number(tracking_number)
        return Response(ShipmentSerializer(shipment).data)
