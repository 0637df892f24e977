from __future__ import annotations

from rest_framework import serializers

from modules.notifications.models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(source="customer_id", read_only=True, allow_null=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "user_id",
            "title",
            "body",
            "data",
            "notification_type",
            "is_read",
            "sent_at",
            "read_at",
        ]
        read_only_fields = fields
