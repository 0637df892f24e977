from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.notifications.constants import NotificationType


class Notification(BaseModel):
    """A push notification as recorded in the customer's inbox.

    ``customer`` is ``NULL`` for broadcasts and multi-recipient sends.
    """

    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications",
    )
    title = models.CharField(max_length=100)
    body = models.CharField(max_length=500)
    data = models.JSONField(default=dict, blank=True)
    notification_type = models.CharField(
        max_length=20, choices=NotificationType.choices, default=NotificationType.GENERAL
    )
    is_read = models.BooleanField(default=False)
    sent_at = models.DateTimeField(auto_now_add=True)
    read_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "notifications"
        ordering = ["-sent_at"]
        indexes = [
            models.Index(fields=["customer", "-sent_at"], name="notifications_inbox_idx"),
        ]

    def __str__(self) -> str:
        return self.title
