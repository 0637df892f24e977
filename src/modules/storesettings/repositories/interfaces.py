"""Store setting repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.storesettings.models import StoreSetting


class IStoreSettingRepository(IRepository["StoreSetting"]):
    @abstractmethod
    def upsert(self, key: str, group: str, value: str) -> StoreSetting:
        """Create the ``(key, group)`` entry or overwrite its value."""
