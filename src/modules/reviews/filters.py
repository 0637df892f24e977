import django_filters

from modules.reviews.models import Review


class ReviewFilter(django_filters.FilterSet):
    isApproved = django_filters.BooleanFilter(field_name="is_approved")
    productId = django_filters.UUIDFilter(field_name="product_id")

    class Meta:
        model = Review
        fields = ["isApproved", "productId"]
