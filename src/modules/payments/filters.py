import django_filters

from modules.payments.models import PaymentInfo, PaymentMethod


class PaymentMethodFilter(django_filters.FilterSet):
    active = django_filters.BooleanFilter(field_name="active")

    class Meta:
        model = PaymentMethod
        fields = ["active"]


class PaymentInfoFilter(django_filters.FilterSet):
    status = django_filters.CharFilter(
        field_name="payment_status", lookup_expr="iexact"
    )
    order = django_filters.UUIDFilter(field_name="order_id")
    site = django_filters.UUIDFilter(field_name="site_id")

    class Meta:
        model = PaymentInfo
        fields = ["status", "order", "site"]
