from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel

DEFAULT_GROUP = "store"


class StoreSetting(BaseModel):
    """Free-form key/value store configuration, grouped by concern
    (``store``, ``payment``, ``shipping``...)."""

    key = models.CharField(max_length=100)
    value = models.TextField(blank=True, default="")
    group = models.CharField(max_length=50, default=DEFAULT_GROUP)

    class Meta:
        db_table = "store_settings"
        ordering = ["group", "key"]
        constraints = [
            models.UniqueConstraint(
                fields=["key", "group"], name="store_settings_key_group_unique"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.group}.{self.key}"
