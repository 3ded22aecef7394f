import django_filters

from modules.products.models import Product


class ProductFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    code = django_filters.CharFilter(field_name="code", lookup_expr="iexact")
    category = django_filters.UUIDFilter(field_name="category_id")
    min_price = django_filters.NumberFilter(
        field_name="retail_price", lookup_expr="gte"
    )
    max_price = django_filters.NumberFilter(
        field_name="retail_price", lookup_expr="lte"
    )

    class Meta:
        model = Product
        fields = ["name", "code", "category", "min_price", "max_price"]
