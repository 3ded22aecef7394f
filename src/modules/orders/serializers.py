"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).  Business
logic lives in the Service Layer, which receives Pydantic DTOs from
``dtos.py``.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem, OrderStatusLog
from modules.payments.serializers import PaymentInfoSerializer
from modules.shipping.serializers import (
    ShipmentSerializer,
    ShippingAddressInputSerializer,
)


def _amount(**kwargs) -> serializers.DecimalField:
    return serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0"), **kwargs
    )


# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single item in an order creation request."""

    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    unit_price = _amount()
    memo = serializers.CharField(required=False, default="", allow_blank=True)


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    customer_id = serializers.UUIDField()
    site_id = serializers.UUIDField()
    shop_id = serializers.UUIDField()
    payment_method_id = serializers.UUIDField()
    delivery_method_id = serializers.UUIDField()
    delivery_slot_id = serializers.UUIDField(required=False, allow_null=True)
    shipping_address = ShippingAddressInputSerializer()
    items = CreateOrderItemSerializer(many=True, allow_empty=False)
    total_amount = _amount()
    shipping_fee = _amount(required=False, default=Decimal("0.00"))
    discount_amount = _amount(required=False, default=Decimal("0.00"))
    billing_amount = _amount()
    desired_arrival_date = serializers.DateField(required=False, allow_null=True)
    memo = serializers.CharField(required=False, default="", allow_blank=True)


class UpdateOrderSerializer(serializers.Serializer):
    payment_method_id = serializers.UUIDField(required=False)
    delivery_method_id = serializers.UUIDField(required=False)
    delivery_slot_id = serializers.UUIDField(required=False)
    shipping_fee = _amount(required=False)
    discount_amount = _amount(required=False)
    billing_amount = _amount(required=False)
    desired_arrival_date = serializers.DateField(required=False)
    memo = serializers.CharField(required=False, allow_blank=True)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for order items with the product snapshot."""

    subtotal = serializers.DecimalField(
        max_digits=14, decimal_places=2, read_only=True
    )

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "category_id",
            "product_code",
            "product_name",
            "quantity",
            "unit_price",
            "subtotal",
            "memo",
        ]
        read_only_fields = fields


class OrderStatusLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderStatusLog
        fields = ["id", "status", "changed_at"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with every child collection."""

    items = OrderItemSerializer(many=True, read_only=True)
    payments = PaymentInfoSerializer(many=True, read_only=True)
    shipments = ShipmentSerializer(many=True, read_only=True)
    status_logs = OrderStatusLogSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer_id",
            "site_id",
            "shop_id",
            "payment_method_id",
            "delivery_method_id",
            "delivery_slot_id",
            "status",
            "total_amount",
            "shipping_fee",
            "discount_amount",
            "billing_amount",
            "order_date",
            "desired_arrival_date",
            "memo",
            "created_at",
            "updated_at",
            "items",
            "payments",
            "shipments",
            "status_logs",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order list (no nested relations)."""

    customer_name = serializers.CharField(source="customer.name", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer_id",
            "customer_name",
            "status",
            "billing_amount",
            "order_date",
        ]
        read_only_fields = fields
