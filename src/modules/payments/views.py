"""Payment API views.

Status changes and refunds are dedicated actions; the generic PATCH
never touches ``payment_status``.
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

from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.payments.dtos import (
    CreatePaymentInfoDTO,
    CreatePaymentMethodDTO,
    UpdatePaymentInfoDTO,
    UpdatePaymentMethodDTO,
)
from modules.payments.filters import PaymentInfoFilter, PaymentMethodFilter
from modules.payments.models import PaymentInfo, PaymentMethod
from modules.payments.repositories.django_repository import (
    PaymentInfoDjangoRepository,
    PaymentMethodDjangoRepository,
)
from modules.payments.serializers import (
    PaymentInfoInputSerializer,
    PaymentInfoSerializer,
    PaymentInfoUpdateSerializer,
    PaymentMethodInputSerializer,
    PaymentMethodSerializer,
    PaymentStatusSerializer,
)
from modules.payments.services import PaymentInfoService, PaymentMethodService
from modules.stores.repositories.django_repository import SiteDjangoRepository


class PaymentMethodViewSet(ListModelMixin, GenericViewSet):
    queryset = PaymentMethod.objects.all()
    serializer_class = PaymentMethodSerializer
    filterset_class = PaymentMethodFilter
    search_fields = ["name", "code"]
    ordering_fields = ["name", "code", "created_at"]
    ordering = ["name"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = PaymentMethodService(repository=PaymentMethodDjangoRepository())

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return Response(PaymentMethodSerializer(self._service.get_method(pk)).data)

    def create(self, request: Request) -> Response:
        serializer = PaymentMethodInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        method = self._service.create_method(
            CreatePaymentMethodDTO(**serializer.validated_data)
        )
        return Response(
            PaymentMethodSerializer(method).data, status=status.HTTP_201_CREATED
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        serializer = PaymentMethodInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        method = self._service.update_method(
            pk, UpdatePaymentMethodDTO(**serializer.validated_data)
        )
        return Response(PaymentMethodSerializer(method).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        self._service.delete_method(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"])
    def toggle(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/payment-methods/{pk}/toggle/"""
        method = self._service.toggle_status(pk)
        return Response(PaymentMethodSerializer(method).data)

    @action(detail=False, methods=["get"], url_path=r"by-code/(?P<code>[^/]+)")
    def by_code(self, request: Request, code: str) -> Response:
        return Response(PaymentMethodSerializer(self._service.get_by_code(code)).data)


class PaymentInfoViewSet(ListModelMixin, GenericViewSet):
    queryset = PaymentInfo.objects.all()
    serializer_class = PaymentInfoSerializer
    filterset_class = PaymentInfoFilter
    ordering_fields = ["created_at", "payment_amount", "payment_date"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    search_fields = ["transaction_id"]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = PaymentInfoService(
            repository=PaymentInfoDjangoRepository(),
            order_repository=OrderDjangoRepository(),
            site_repository=SiteDjangoRepository(),
        )

    def get_queryset(self):
        return PaymentInfoDjangoRepository().get_queryset()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return Response(PaymentInfoSerializer(self._service.get_payment(pk)).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/payment-info/. 409 when the order already has one."""
        serializer = PaymentInfoInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = self._service.create_payment(
            CreatePaymentInfoDTO(**serializer.validated_data)
        )
        return Response(
            PaymentInfoSerializer(payment).data, status=status.HTTP_201_CREATED
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        serializer = PaymentInfoUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = self._service.update_payment(
            pk, UpdatePaymentInfoDTO(**serializer.validated_data)
        )
        return Response(PaymentInfoSerializer(payment).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        self._service.delete_payment(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="status")
    def change_status(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/payment-info/{pk}/status/"""
        serializer = PaymentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        payment = self._service.update_status(
            pk, data["status"], transaction_id=data.get("transaction_id")
        )
        return Response(PaymentInfoSerializer(payment).data)

    @action(detail=True, methods=["post"])
    def refund(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/payment-info/{pk}/refund/"""
        payment = self._service.refund(pk)
        return Response(PaymentInfoSerializer(payment).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"by-transaction/(?P<transaction_id>[^/]+)",
    )
    def by_transaction(self, request: Request, transaction_id: str) -> Response:
        payment = self._service.get_by_transaction_id(transaction_id)
        return Response(PaymentInfoSerializer(payment).data)
