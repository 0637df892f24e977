from __future__ import annotations

from rest_framework import serializers

from modules.banners.models import Banner


class BannerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Banner
        fields = [
            "id",
            "title",
            "image_url",
            "link_type",
            "link_value",
            "banner_type",
            "display_order",
            "starts_at",
            "ends_at",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
