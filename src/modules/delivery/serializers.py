"""Delivery DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.delivery.constants import DeliveryMethodType
from modules.delivery.models import DeliveryMethod, DeliverySlot


class DeliveryMethodInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    code = serializers.CharField(max_length=50)
    type = serializers.ChoiceField(choices=DeliveryMethodType.choices, required=False)


class DeliverySlotInputSerializer(serializers.Serializer):
    delivery_method_id = serializers.UUIDField()
    name = serializers.CharField(max_length=255)
    code = serializers.CharField(max_length=50)


class DeliveryMethodSerializer(serializers.ModelSerializer):
    class Meta:
        model = DeliveryMethod
        fields = ["id", "name", "code", "type", "created_at", "updated_at"]
        read_only_fields = fields


class DeliverySlotSerializer(serializers.ModelSerializer):
    class Meta:
        model = DeliverySlot
        fields = [
            "id",
            "delivery_method_id",
            "name",
            "code",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
