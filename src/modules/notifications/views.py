"""Push notification views (``/admin/notifications``)."""

from __future__ import annotations

from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.responses import errors, success
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.notifications.dtos import SendNotificationDTO
from modules.notifications.exceptions import NoValidDevices
from modules.notifications.filters import NotificationFilter
from modules.notifications.repositories.django_repository import (
    NotificationDjangoRepository,
)
from modules.notifications.serializers import NotificationSerializer
from modules.notifications.services import NotificationService


class NotificationViewSet(ListModelMixin, GenericViewSet):
    filterset_class = NotificationFilter
    serializer_class = NotificationSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = NotificationService(
            repository=NotificationDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
        )

    def get_queryset(self):
        return self._service.list_notifications()

    @action(detail=False, methods=["post"], url_path="send")
    def send_notification(self, request: Request) -> Response:
        """POST /api/v1/admin/notifications/send"""
        dto = SendNotificationDTO.model_validate(request.data)
        try:
            result = self._service.send(dto)
        except NoValidDevices as exc:
            return errors.bad_request(str(exc))
        return success(
            {
                "message": "Notification sent",
                "recipients": result["recipients"],
                "notification": NotificationSerializer(result["notification"]).data,
            }
        )
