from __future__ import annotations

from rest_framework import serializers

from modules.customers.models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = [
            "id",
            "email",
            "name",
            "phone",
            "profile_image",
            "is_guest",
            "is_active",
            "created_at",
        ]
        read_only_fields = fields


class CustomerDetailSerializer(CustomerSerializer):
    orders_count = serializers.SerializerMethodField()

    class Meta(CustomerSerializer.Meta):
        fields = CustomerSerializer.Meta.fields + ["updated_at", "orders_count"]
        read_only_fields = fields

    def get_orders_count(self, obj: Customer) -> int:
        return self.context.get("orders_count", 0)


class CustomerSnapshotSerializer(serializers.ModelSerializer):
    """Compact customer block embedded in orders and reviews."""

    class Meta:
        model = Customer
        fields = ["id", "name", "email", "phone"]
        read_only_fields = fields
