"""Delivery API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.delivery.dtos import (
    CreateDeliveryMethodDTO,
    CreateDeliverySlotDTO,
    UpdateDeliveryMethodDTO,
    UpdateDeliverySlotDTO,
)
from modules.delivery.filters import DeliveryMethodFilter, DeliverySlotFilter
from modules.delivery.models import DeliveryMethod, DeliverySlot
from modules.delivery.repositories.django_repository import (
    DeliveryMethodDjangoRepository,
    DeliverySlotDjangoRepository,
)
from modules.delivery.serializers import (
    DeliveryMethodInputSerializer,
    DeliveryMethodSerializer,
    DeliverySlotInputSerializer,
    DeliverySlotSerializer,
)
from modules.delivery.services import DeliveryMethodService, DeliverySlotService


class DeliveryMethodViewSet(ListModelMixin, GenericViewSet):
    queryset = DeliveryMethod.objects.all()
    serializer_class = DeliveryMethodSerializer
    filterset_class = DeliveryMethodFilter
    search_fields = ["name", "code"]
    ordering_fields = ["name", "code", "created_at"]
    ordering = ["name"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = DeliveryMethodService(
            repository=DeliveryMethodDjangoRepository(),
            slot_repository=DeliverySlotDjangoRepository(),
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return Response(DeliveryMethodSerializer(self._service.get_method(pk)).data)

    def create(self, request: Request) -> Response:
        serializer = DeliveryMethodInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        method = self._service.create_method(
            CreateDeliveryMethodDTO(**serializer.validated_data)
        )
        return Response(
            DeliveryMethodSerializer(method).data, status=status.HTTP_201_CREATED
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        serializer = DeliveryMethodInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        method = self._service.update_method(
            pk, UpdateDeliveryMethodDTO(**serializer.validated_data)
        )
        return Response(DeliveryMethodSerializer(method).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        self._service.delete_method(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["get"])
    def slots(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/delivery-methods/{pk}/slots/"""
        slots = self._service.list_slots(pk)
        return Response(DeliverySlotSerializer(slots, many=True).data)

    @action(detail=False, methods=["get"], url_path=r"by-code/(?P<code>[^/]+)")
    def by_code(self, request: Request, code: str) -> Response:
        return Response(DeliveryMethodSerializer(self._service.get_by_code(code)).data)


class DeliverySlotViewSet(ListModelMixin, GenericViewSet):
    queryset = DeliverySlot.objects.all()
    serializer_class = DeliverySlotSerializer
    filterset_class = DeliverySlotFilter
    search_fields = ["name", "code"]
    ordering_fields = ["code", "name", "created_at"]
    ordering = ["code"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = DeliverySlotService(
            repository=DeliverySlotDjangoRepository(),
            method_repository=DeliveryMethodDjangoRepository(),
        )

    def get_queryset(self):
        return DeliverySlotDjangoRepository().get_queryset()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return Response(DeliverySlotSerializer(self._service.get_slot(pk)).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/delivery-slots/. 409 on a code clash within the method."""
        serializer = DeliverySlotInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        slot = self._service.create_slot(
            CreateDeliverySlotDTO(**serializer.validated_data)
        )
        return Response(
            DeliverySlotSerializer(slot).data, status=status.HTTP_201_CREATED
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        serializer = DeliverySlotInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        slot = self._service.update_slot(
            pk, UpdateDeliverySlotDTO(**serializer.validated_data)
        )
        return Response(DeliverySlotSerializer(slot).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        self._service.delete_slot(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"by-code/(?P<delivery_method_id>[^/]+)/(?P<code>[^/]+)",
    )
    def by_code(self, request: Request, delivery_method_id: str, code: str) -> Response:
        slot = self._service.get_by_code(delivery_method_id, code)
        return Response(DeliverySlotSerializer(slot).data)
