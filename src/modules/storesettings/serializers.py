from __future__ import annotations

from rest_framework import serializers

from modules.storesettings.models import StoreSetting


class StoreSettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = StoreSetting
        fields = ["id", "key", "value", "group", "updated_at"]
        read_only_fields = fields
