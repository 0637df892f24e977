"""Admin console accounts.

``AdminUser`` is deliberately separate from ``django.contrib.auth``'s user
model: admins authenticate only through the JWT issued at login, and the
password is stored with Django's configured ``PASSWORD_HASHERS``.
"""

from __future__ import annotations

import structlog
from django.contrib.auth.hashers import check_password, make_password
from django.db import models

from modules.accounts.constants import AdminRole
from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class AdminUser(BaseModel):
    email = models.EmailField(max_length=254, unique=True)
    password_hash = models.CharField(max_length=255)
    name = models.CharField(max_length=100)
    role = models.CharField(max_length=20, choices=AdminRole.choices)
    is_active = models.BooleanField(default=True)
    last_login_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "admin_users"
        ordering = ["email"]

    def set_password(self, raw_password: str) -> None:
        self.password_hash = make_password(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return check_password(raw_password, self.password_hash)

    def save(self, *args, **kwargs) -> None:
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"
