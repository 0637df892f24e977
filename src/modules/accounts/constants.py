"""Admin account constants."""

from django.db import models


class AdminRole(models.TextChoices):
    SUPER_ADMIN = "super_admin", "Super admin"
    ADMIN = "admin", "Admin"
    MANAGER = "manager", "Manager"
