"""Store settings views (``/admin/settings``).

Settings are a small fixed set, so the list is returned whole rather than
paginated.
"""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.responses import success
from modules.storesettings.dtos import StoreSettingListAdapter
from modules.storesettings.repositories.django_repository import (
    StoreSettingDjangoRepository,
)
from modules.storesettings.serializers import StoreSettingSerializer
from modules.storesettings.services import StoreSettingService


class StoreSettingsView(APIView):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = StoreSettingService(repository=StoreSettingDjangoRepository())

    def get(self, request: Request) -> Response:
        """GET /api/v1/admin/settings?group="""
        settings = self._service.list_settings(request.query_params.get("group"))
        return success(StoreSettingSerializer(settings, many=True).data)

    def put(self, request: Request) -> Response:
        """PUT /api/v1/admin/settings with ``[{key, value, group?}, ...]``"""
        items = StoreSettingListAdapter.validate_python(request.data)
        self._service.update_settings(items)
        return success({"message": "Settings updated successfully"})
