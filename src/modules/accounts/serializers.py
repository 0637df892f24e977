from __future__ import annotations

from rest_framework import serializers

from modules.accounts.models import AdminUser


class AdminUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = AdminUser
        fields = ["id", "email", "name", "role", "is_active", "last_login_at", "created_at"]
        read_only_fields = fields


class AdminSummarySerializer(serializers.ModelSerializer):
    """Admin block embedded in the login response."""

    class Meta:
        model = AdminUser
        fields = ["id", "email", "name", "role"]
        read_only_fields = fields
