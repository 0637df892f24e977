from __future__ import annotations

from rest_framework import serializers

from modules.coupons.models import Coupon, CouponUsage


class CouponSerializer(serializers.ModelSerializer):
    class Meta:
        model = Coupon
        fields = [
            "id",
            "code",
            "description",
            "discount_type",
            "discount_value",
            "minimum_purchase",
            "maximum_discount",
            "usage_limit",
            "usage_count",
            "user_usage_limit",
            "applicable_products",
            "applicable_categories",
            "starts_at",
            "ends_at",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CouponUsageSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(source="customer_id", read_only=True, allow_null=True)
    order_number = serializers.CharField(source="order.order_number", read_only=True)

    class Meta:
        model = CouponUsage
        fields = ["id", "user_id", "order_id", "order_number", "used_at"]
        read_only_fields = fields


class CouponDetailSerializer(CouponSerializer):
    usage_history = serializers.SerializerMethodField()

    class Meta(CouponSerializer.Meta):
        fields = CouponSerializer.Meta.fields + ["usage_history"]
        read_only_fields = fields

    def get_usage_history(self, obj: Coupon):
        usages = self.context.get("usages", [])
        return CouponUsageSerializer(usages, many=True).data
