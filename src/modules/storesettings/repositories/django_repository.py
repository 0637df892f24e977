from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.storesettings.models import StoreSetting
from modules.storesettings.repositories.interfaces import IStoreSettingRepository

logger = structlog.get_logger(__name__)


class StoreSettingDjangoRepository(IStoreSettingRepository):
    def get_by_id(self, id: str) -> Optional[StoreSetting]:
        try:
            return StoreSetting.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = StoreSetting.objects.order_by("group", "key")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: StoreSetting) -> StoreSetting:
        entity.save()
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        deleted, _ = StoreSetting.objects.filter(id=id).delete()
        return deleted > 0

    def upsert(self, key: str, group: str, value: str) -> StoreSetting:
        setting, created = StoreSetting.objects.update_or_create(
            key=key, group=group, defaults={"value": value}
        )
        logger.info("store_setting.saved", key=key, group=group, created=created)
        return setting
