from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.customers.models import Customer
from modules.notifications.constants import Segment
from modules.notifications.models import Notification
from modules.notifications.repositories.interfaces import INotificationRepository

logger = structlog.get_logger(__name__)


class NotificationDjangoRepository(INotificationRepository):
    def get_by_id(self, id: str) -> Optional[Notification]:
        try:
            return Notification.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Notification.objects.select_related("customer").order_by(
            "-sent_at", "-id"
        )
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Notification) -> Notification:
        entity.save()
        logger.info("notification.saved", notification_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        deleted, _ = Notification.objects.filter(id=id).delete()
        return deleted > 0

    def count_devices(self, segment: str) -> int:
        queryset = Customer.objects.filter(is_active=True).exclude(push_player_id="")
        if segment == Segment.REGISTERED:
            queryset = queryset.filter(is_guest=False)
        elif segment == Segment.GUESTS:
            queryset = queryset.filter(is_guest=True)
        return queryset.count()
