import django_filters

from modules.shipping.models import Shipment, ShippingAddress


class ShippingAddressFilter(django_filters.FilterSet):
    prefecture = django_filters.CharFilter(
        field_name="prefecture", lookup_expr="iexact"
    )
    postal_code = django_filters.CharFilter(
        field_name="postal_code", lookup_expr="startswith"
    )

    class Meta:
        model = ShippingAddress
        fields = ["prefecture", "postal_code"]


class ShipmentFilter(django_filters.FilterSet):
    status = django_filters.CharFilter(
        field_name="shipping_status", lookup_expr="iexact"
    )
    order = django_filters.UUIDFilter(field_name="order_id")
    shop = django_filters.UUIDFilter(field_name="shop_id")

    class Meta:
        model = Shipment
        fields = ["status", "order", "shop"]
