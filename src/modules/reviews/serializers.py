from __future__ import annotations

from rest_framework import serializers

from modules.catalog.serializers import ProductSnapshotSerializer
from modules.customers.serializers import CustomerSnapshotSerializer
from modules.reviews.models import Review


class ReviewSerializer(serializers.ModelSerializer):
    product = ProductSnapshotSerializer(read_only=True)
    user = CustomerSnapshotSerializer(source="customer", read_only=True, allow_null=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "product",
            "user",
            "order_id",
            "rating",
            "title",
            "content",
            "is_verified_purchase",
            "is_approved",
            "helpful_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
