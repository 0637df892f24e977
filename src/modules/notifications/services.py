"""Push notification service.

The notification is stored first; delivery to the push gateway is a
Celery task enqueued once the surrounding transaction commits, so a
rolled-back send never reaches a device.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.notifications.constants import (
    ORDER_STATUS_MESSAGES,
    NotificationType,
    Segment,
)
from modules.notifications.exceptions import NoValidDevices
from modules.notifications.models import Notification
from modules.notifications.tasks import deliver_push

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.notifications.dtos import SendNotificationDTO
    from modules.notifications.repositories.interfaces import INotificationRepository
    from modules.orders.models import Order

logger = structlog.get_logger(__name__)


class NotificationService:
    def __init__(
        self,
        repository: INotificationRepository,
        customer_repository: ICustomerRepository,
    ) -> None:
        self._repo = repository
        self._customer_repo = customer_repository

    @transaction.atomic
    def send(self, dto: SendNotificationDTO) -> Dict[str, Any]:
        """Store a notification and enqueue its delivery.

        Raises:
            NoValidDevices: ``user_ids`` were given but none of them
                resolves to a customer with a push device.
        """
        if dto.user_ids:
            customers = self._customer_repo.get_many(dto.user_ids)
            player_ids = [c.push_player_id for c in customers if c.push_player_id]
            if not player_ids:
                logger.warning("notification.no_devices", user_ids=dto.user_ids)
                raise NoValidDevices("No valid devices found for specified users")
            audience: Dict[str, Any] = {"player_ids": player_ids}
            recipients = len(player_ids)
            customer_id = customers[0].id if len(dto.user_ids) == 1 else None
        else:
            segment = dto.segment or Segment.ALL
            audience = {"segment": str(segment)}
            recipients = self._repo.count_devices(segment)
            customer_id = None

        notification = self._repo.save(
            Notification(
                customer_id=customer_id,
                title=dto.title,
                body=dto.body,
                data=dto.data,
                notification_type=NotificationType.GENERAL,
            )
        )
        self._enqueue(notification, audience)
        logger.info(
            "notification.sent",
            notification_id=str(notification.id),
            recipients=recipients,
            segment=audience.get("segment"),
        )
        return {"notification": notification, "recipients": recipients}

    @transaction.atomic
    def notify_order_status(self, order: Order, status: str) -> Optional[Notification]:
        """Inbox entry (and push, when the customer has a device) for an
        order status change.  Guest orders and statuses without a message
        are skipped."""
        customer = order.customer
        message = ORDER_STATUS_MESSAGES.get(status)
        if customer is None or message is None:
            return None

        title, body = message
        notification = self._repo.save(
            Notification(
                customer=customer,
                title=title,
                body=body.format(order_number=order.order_number),
                data={
                    "order_id": str(order.id),
                    "order_number": order.order_number,
                    "status": status,
                },
                notification_type=NotificationType.ORDER,
            )
        )
        if customer.push_player_id:
            self._enqueue(notification, {"player_ids": [customer.push_player_id]})
        logger.info(
            "notification.order_status",
            notification_id=str(notification.id),
            order_id=str(order.id),
            status=status,
        )
        return notification

    def list_notifications(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet:
        return self._repo.list(filters)

    @staticmethod
    def _enqueue(notification: Notification, audience: Dict[str, Any]) -> None:
        notification_id = str(notification.id)
        transaction.on_commit(lambda: deliver_push.delay(notification_id, audience))
