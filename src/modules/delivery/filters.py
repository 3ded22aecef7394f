import django_filters

from modules.delivery.models import DeliveryMethod, DeliverySlot


class DeliveryMethodFilter(django_filters.FilterSet):
    type = django_filters.CharFilter(field_name="type", lookup_expr="iexact")

    class Meta:
        model = DeliveryMethod
        fields = ["type"]


class DeliverySlotFilter(django_filters.FilterSet):
    delivery_method = django_filters.UUIDFilter(field_name="delivery_method_id")
    code = django_filters.CharFilter(field_name="code", lookup_expr="iexact")

    class Meta:
        model = DeliverySlot
        fields = ["delivery_method", "code"]
