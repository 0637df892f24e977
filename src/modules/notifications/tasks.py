"""Celery tasks for push notifications.

The push gateway is an external collaborator; ``deliver_push`` builds the
gateway payload and hands it off, logging the dispatch.
"""

import structlog
from celery import shared_task

from modules.notifications.models import Notification

logger = structlog.get_logger(__name__)


@shared_task(name="notifications.deliver_push")
def deliver_push(notification_id, audience):
    notification = Notification.objects.filter(id=notification_id).first()
    if notification is None:
        logger.warning("notification.push_skipped", notification_id=notification_id)
        return None

    payload = {
        "headings": {"en": notification.title},
        "contents": {"en": notification.body},
        "data": notification.data,
    }
    if "player_ids" in audience:
        payload["include_player_ids"] = audience["player_ids"]
    else:
        payload["segment"] = audience.get("segment", "all")

    logger.info(
        "notification.push_dispatched",
        notification_id=notification_id,
        player_count=len(audience.get("player_ids", [])),
        segment=audience.get("segment"),
    )
    return payload


@shared_task(name="notifications.notify_order_status")
def notify_order_status(order_id, status):
    """Runs after an order transition commits."""
    from modules.customers.repositories.django_repository import (
        CustomerDjangoRepository,
    )
    from modules.notifications.repositories.django_repository import (
        NotificationDjangoRepository,
    )
    from modules.notifications.services import NotificationService
    from modules.orders.repositories.django_repository import OrderDjangoRepository

    order = OrderDjangoRepository().get_by_id(order_id)
    if order is None:
        logger.warning("notification.order_missing", order_id=order_id)
        return None

    service = NotificationService(
        repository=NotificationDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
    )
    notification = service.notify_order_status(order, status)
    return str(notification.id) if notification else None
