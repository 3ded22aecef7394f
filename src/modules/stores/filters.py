import django_filters

from modules.stores.models import Shop, Site


class SiteFilter(django_filters.FilterSet):
    status = django_filters.CharFilter(field_name="status", lookup_expr="iexact")

    class Meta:
        model = Site
        fields = ["status"]


class ShopFilter(django_filters.FilterSet):
    site = django_filters.UUIDFilter(field_name="site_id")

    class Meta:
        model = Shop
        fields = ["site"]
