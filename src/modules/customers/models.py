"""Storefront customers as seen by the admin console.

Customers sign in on the storefront (Google account or anonymous guest
device); the admin API only reads them and toggles ``is_active``.
``push_player_id`` is the device handle the push gateway addresses.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Customer(BaseModel):
    name = models.CharField(max_length=100, blank=True, default="")
    email = models.EmailField(max_length=254, null=True, blank=True)
    phone = models.CharField(max_length=20, blank=True, default="")
    profile_image = models.URLField(max_length=500, blank=True, default="")
    device_id = models.CharField(max_length=255, blank=True, default="")
    push_player_id = models.CharField(max_length=255, blank=True, default="")
    is_guest = models.BooleanField(default=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "customers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="customers_created_idx"),
            models.Index(fields=["is_guest"], name="customers_guest_idx"),
        ]

    def __str__(self) -> str:
        return self.name or self.email or str(self.id)
