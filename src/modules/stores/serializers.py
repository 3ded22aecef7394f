"""Site and Shop DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.stores.constants import SiteStatus
from modules.stores.models import Shop, Site


class SiteInputSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50)
    name = serializers.CharField(max_length=255)
    status = serializers.ChoiceField(choices=SiteStatus.choices, required=False)


class ShopInputSerializer(serializers.Serializer):
    site_id = serializers.UUIDField()
    code = serializers.CharField(max_length=50)
    name = serializers.CharField(max_length=255)


class SiteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Site
        fields = ["id", "code", "name", "status", "created_at", "updated_at"]
        read_only_fields = fields


class ShopSerializer(serializers.ModelSerializer):
    site = SiteSerializer(read_only=True)

    class Meta:
        model = Shop
        fields = ["id", "code", "name", "site", "created_at", "updated_at"]
        read_only_fields = fields
