import django_filters

from modules.notifications.constants import NotificationType
from modules.notifications.models import Notification


class NotificationFilter(django_filters.FilterSet):
    type = django_filters.ChoiceFilter(
        field_name="notification_type", choices=NotificationType.choices
    )
    userId = django_filters.UUIDFilter(field_name="customer_id")

    class Meta:
        model = Notification
        fields = ["type", "userId"]
