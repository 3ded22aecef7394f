"""Shipping DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.shipping.constants import ShippingStatus
from modules.shipping.models import Shipment, ShippingAddress


class ShippingAddressInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    postal_code = serializers.CharField(max_length=20)
    prefecture = serializers.CharField(max_length=100)
    address_line = serializers.CharField(max_length=500)


class ShipmentInputSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    site_id = serializers.UUIDField()
    shop_id = serializers.UUIDField()
    address_id = serializers.UUIDField()
    delivery_slot_id = serializers.UUIDField(required=False, allow_null=True)
    tracking_number = serializers.CharField(
        max_length=100, required=False, allow_blank=True
    )
    shipped_at = serializers.DateTimeField(required=False, allow_null=True)


class ShipmentUpdateSerializer(serializers.Serializer):
    address_id = serializers.UUIDField(required=False)
    delivery_slot_id = serializers.UUIDField(required=False)
    tracking_number = serializers.CharField(
        max_length=100, required=False, allow_blank=True
    )
    shipped_at = serializers.DateTimeField(required=False)


class ShipmentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ShippingStatus.choices)
    tracking_number = serializers.CharField(
        max_length=100, required=False, allow_blank=True
    )


class ShippingAddressSerializer(serializers.ModelSerializer):
    class Meta:
        model = ShippingAddress
        fields = [
            "id",
            "name",
            "postal_code",
            "prefecture",
            "address_line",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ShipmentSerializer(serializers.ModelSerializer):
    address = ShippingAddressSerializer(read_only=True)

    class Meta:
        model = Shipment
        fields = [
            "id",
            "order_id",
            "site_id",
            "shop_id",
            "address",
            "delivery_slot_id",
            "tracking_number",
            "shipped_at",
            "shipping_status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
