"""Admin account repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.accounts.models import AdminUser


class IAdminUserRepository(IRepository["AdminUser"]):
    @abstractmethod
    def get_by_email(self, email: str) -> Optional[AdminUser]:
        """Retrieve an admin by (lower-cased) email."""

    @abstractmethod
    def touch_last_login(self, admin: AdminUser) -> None:
        """Stamp ``last_login_at`` with the current time."""
