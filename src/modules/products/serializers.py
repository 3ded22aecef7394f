"""Catalogue DRF serializers."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.products.models import Category, Product


class CategoryInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)


class ProductInputSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=255)
    category_id = serializers.UUIDField()
    retail_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0")
    )
    purchase_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0"), required=False
    )


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "created_at", "updated_at"]
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    category = CategorySerializer(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "code",
            "name",
            "category",
            "retail_price",
            "purchase_price",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
