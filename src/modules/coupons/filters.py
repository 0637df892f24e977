import django_filters

from modules.coupons.models import Coupon


class CouponFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    isActive = django_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = Coupon
        fields = ["search", "isActive"]

    def filter_search(self, queryset, name, value):
        return queryset.filter(code__contains=value.strip().upper())
