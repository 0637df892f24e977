"""Order DRF serializers (read side).

Input is validated by the Pydantic DTOs in ``dtos.py``; these serializers
only shape responses.  ``user`` is the compact customer snapshot, ``null``
for guest orders.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.serializers import CustomerSnapshotSerializer
from modules.orders.models import Order, OrderItem, OrderStatusHistory


class OrderItemSerializer(serializers.ModelSerializer):
    """Line item as snapshotted at checkout."""

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "product_name",
            "variant_name",
            "quantity",
            "unit_price",
            "total_price",
        ]
        read_only_fields = fields


class StatusHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderStatusHistory
        fields = [
            "id",
            "old_status",
            "new_status",
            "notes",
            "changed_by",
            "created_at",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Order row for list views (no items or history)."""

    user = CustomerSnapshotSerializer(source="customer", read_only=True, allow_null=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "user",
            "status",
            "subtotal",
            "discount_amount",
            "shipping_amount",
            "tax_amount",
            "total_amount",
            "payment_method",
            "payment_status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderSerializer(OrderListSerializer):
    """Full order with nested items and status history."""

    items = OrderItemSerializer(many=True, read_only=True)
    status_history = StatusHistorySerializer(many=True, read_only=True)
    coupon_code = serializers.CharField(
        source="coupon.code", read_only=True, allow_null=True, default=None
    )

    class Meta(OrderListSerializer.Meta):
        fields = OrderListSerializer.Meta.fields + [
            "coupon_code",
            "shipping_address",
            "billing_address",
            "payment_reference",
            "notes",
            "shipped_at",
            "delivered_at",
            "cancelled_at",
            "cancellation_reason",
            "items",
            "status_history",
        ]
        read_only_fields = fields
