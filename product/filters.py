import django_filters
from django.db.models import Q

from .models import Product

JSON_PUNCTUATION = str.maketrans("", "", "\"[],:\\{}")


class ProductFilter(django_filters.FilterSet):
    category = django_filters.ChoiceFilter(choices=Product.CATEGORY_CHOICES)
    condition = django_filters.ChoiceFilter(choices=Product.CONDITION_CHOICES)
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    location = django_filters.CharFilter(lookup_expr="icontains")
    search = django_filters.CharFilter(method="filter_search")
    available = django_filters.BooleanFilter(field_name="is_available")

    class Meta:
        model = Product
        fields = ["category", "condition", "min_price", "max_price", "location", "search", "available"]

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        condition = Q(title__icontains=value) | Q(description__icontains=value)
        # tags are matched against their JSON text, so JSON punctuation would hit every tagged row
        tag_text = value.translate(JSON_PUNCTUATION).strip()
        if tag_text:
            condition |= Q(tags__icontains=tag_text)
        return queryset.filter(condition)


# ?sort= values accepted by the product list
SORT_ORDERINGS = {
    "newest": ("-created_at",),
    "price_low": ("price", "-created_at"),
    "price_high": ("-price", "-created_at"),
    "popular": ("-views", "-created_at"),
}
