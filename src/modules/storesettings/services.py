from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import transaction

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.storesettings.dtos import StoreSettingDTO
    from modules.storesettings.models import StoreSetting
    from modules.storesettings.repositories.interfaces import IStoreSettingRepository

logger = structlog.get_logger(__name__)


class StoreSettingService:
    def __init__(self, repository: IStoreSettingRepository) -> None:
        self._repo = repository

    def list_settings(self, group: Optional[str] = None) -> QuerySet:
        return self._repo.list({"group": group} if group else None)

    @transaction.atomic
    def update_settings(self, items: List[StoreSettingDTO]) -> List[StoreSetting]:
        """Upsert every entry; all of them are written or none is."""
        saved = [self._repo.upsert(item.key, item.group, item.value) for item in items]
        logger.info("store_settings.updated", count=len(saved))
        return saved
