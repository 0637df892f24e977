import django_filters
from django.db.models import Q

from modules.customers.models import Customer


class CustomerFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    isGuest = django_filters.BooleanFilter(field_name="is_guest")
    isActive = django_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = Customer
        fields = ["search", "isGuest", "isActive"]

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(name__icontains=value) | Q(email__icontains=value) | Q(phone__icontains=value)
        )
