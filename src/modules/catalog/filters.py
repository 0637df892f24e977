import django_filters
from django.db.models import Q

from modules.catalog.models import Category, Product


class CategoryFilter(django_filters.FilterSet):
    isActive = django_filters.BooleanFilter(field_name="is_active")
    parentId = django_filters.UUIDFilter(field_name="parent_id")

    class Meta:
        model = Category
        fields = ["isActive", "parentId"]


class ProductFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    categoryId = django_filters.UUIDFilter(field_name="category_id")
    isActive = django_filters.BooleanFilter(field_name="is_active")
    isFeatured = django_filters.BooleanFilter(field_name="is_featured")

    class Meta:
        model = Product
        fields = ["search", "categoryId", "isActive", "isFeatured"]

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(sku__icontains=value))
