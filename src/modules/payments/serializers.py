"""Payment DRF serializers."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.payments.constants import PaymentStatus
from modules.payments.models import PaymentInfo, PaymentMethod


class PaymentMethodInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    code = serializers.CharField(max_length=50)
    active = serializers.BooleanField(required=False)


class PaymentInfoInputSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    site_id = serializers.UUIDField()
    payment_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0")
    )
    transaction_id = serializers.CharField(
        max_length=255, required=False, allow_blank=True
    )


class PaymentInfoUpdateSerializer(serializers.Serializer):
    site_id = serializers.UUIDField(required=False)
    payment_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0"), required=False
    )
    transaction_id = serializers.CharField(
        max_length=255, required=False, allow_blank=True
    )


class PaymentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=PaymentStatus.choices)
    transaction_id = serializers.CharField(
        max_length=255, required=False, allow_blank=True
    )


class PaymentMethodSerializer(serializers.ModelSerializer):
    class Meta:
        model = PaymentMethod
        fields = ["id", "name", "code", "active", "created_at", "updated_at"]
        read_only_fields = fields


class PaymentInfoSerializer(serializers.ModelSerializer):
    class Meta:
        model = PaymentInfo
        fields = [
            "id",
            "order_id",
            "site_id",
            "payment_amount",
            "payment_status",
            "transaction_id",
            "payment_date",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
