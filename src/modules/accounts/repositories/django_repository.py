"""Django ORM implementation of the admin account repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.utils import timezone

from modules.accounts.models import AdminUser
from modules.accounts.repositories.interfaces import IAdminUserRepository

logger = structlog.get_logger(__name__)


class AdminUserDjangoRepository(IAdminUserRepository):
    def get_by_id(self, id: str) -> Optional[AdminUser]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return AdminUser.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_email(self, email: str) -> Optional[AdminUser]:
        return AdminUser.objects.filter(email=email.strip().lower()).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = AdminUser.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: AdminUser) -> AdminUser:
        entity.save()
        logger.info("admin.saved", admin_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        deleted, _ = AdminUser.objects.filter(id=id).delete()
        return deleted > 0

    def touch_last_login(self, admin: AdminUser) -> None:
        admin.last_login_at = timezone.now()
        admin.save(update_fields=["last_login_at"])
