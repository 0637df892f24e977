"""Catalog output serializers.

Input is validated by the Pydantic DTOs in ``dtos.py``; these serializers
only render.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.catalog.models import Category, Product


class CategorySerializer(serializers.ModelSerializer):
    parent_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Category
        fields = [
            "id",
            "parent_id",
            "name",
            "slug",
            "description",
            "image_url",
            "display_order",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    category_id = serializers.UUIDField(read_only=True, allow_null=True)
    category_name = serializers.CharField(
        source="category.name", read_only=True, default=None
    )

    class Meta:
        model = Product
        fields = [
            "id",
            "sku",
            "name",
            "slug",
            "short_description",
            "long_description",
            "base_price",
            "sale_price",
            "category_id",
            "category_name",
            "brand",
            "stock_quantity",
            "is_featured",
            "is_active",
            "average_rating",
            "review_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductSnapshotSerializer(serializers.ModelSerializer):
    """Compact product block embedded in reviews."""

    class Meta:
        model = Product
        fields = ["id", "name", "sku"]
        read_only_fields = fields
