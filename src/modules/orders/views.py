"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.  Domain errors
propagate to the project exception handler, which maps their kind to a
status code.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.delivery.repositories.django_repository import (
    DeliveryMethodDjangoRepository,
    DeliverySlotDjangoRepository,
)
from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderListSerializer,
    OrderSerializer,
    OrderStatusLogSerializer,
    OrderStatusSerializer,
    UpdateOrderSerializer,
)
from modules.orders.services import OrderService
from modules.payments.repositories.django_repository import (
    PaymentInfoDjangoRepository,
    PaymentMethodDjangoRepository,
)
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.shipping.repositories.django_repository import (
    ShipmentDjangoRepository,
    ShippingAddressDjangoRepository,
)
from modules.stores.repositories.django_repository import (
    ShopDjangoRepository,
    SiteDjangoRepository,
)


def build_order_service() -> OrderService:
    """Wire ``OrderService`` to the Django ORM repositories."""
    return OrderService(
        order_repository=OrderDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
        site_repository=SiteDjangoRepository(),
        shop_repository=ShopDjangoRepository(),
        payment_method_repository=PaymentMethodDjangoRepository(),
        delivery_method_repository=DeliveryMethodDjangoRepository(),
        delivery_slot_repository=DeliverySlotDjangoRepository(),
        product_repository=ProductDjangoRepository(),
        address_repository=ShippingAddressDjangoRepository(),
        payment_repository=PaymentInfoDjangoRepository(),
        shipment_repository=ShipmentDjangoRepository(),
    )


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Does **not** extend ``ModelViewSet``: all ORM access goes through the
    service/repository layer.
    """

    queryset = Order.objects.all()
    filterset_class = OrderFilter
    search_fields = ["order_number", "customer__name"]
    ordering_fields = ["order_date", "billing_amount", "status"]
    ordering = ["-order_date", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_order_service()

    def get_throttles(self) -> list[BaseThrottle]:
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    def get_queryset(self):
        return Order.objects.select_related("customer")

    # ------------------------------------------------------------------
    # Create / Update / Delete
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self._service.create_order(
            CreateOrderDTO(**serializer.validated_data)
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/

        Field update only.  Status changes go through ``/status/``.
        """
        serializer = UpdateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self._service.update_order(
            pk, UpdateOrderDTO(**serializer.validated_data)
        )
        return Response(OrderSerializer(order).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        self._service.delete_order(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filtering is handled by ``OrderFilter``, ordering by
        ``OrderingFilter``.  Results are paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(queryset, request)
        serializer = OrderListSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        return Response(OrderSerializer(self._service.get_order(pk)).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"by-number/(?P<order_number>[^/]+)",
    )
    def by_number(self, request: Request, order_number: str) -> Response:
        order = self._service.get_by_order_number(order_number)
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"], url_path="status")
    def change_status(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/status/"""
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self._service.update_status(pk, serializer.validated_data["status"])
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["get"], url_path="status-logs")
    def status_logs(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/status-logs/"""
        logs = self._service.list_status_logs(pk)
        return Response(OrderStatusLogSerializer(logs, many=True).data)
