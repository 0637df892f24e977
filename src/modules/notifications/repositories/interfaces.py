"""Notification repository interface."""

from __future__ import annotations

from abc import abstractmethod

from modules.core.repositories.interfaces import IRepository


class INotificationRepository(IRepository["Notification"]):
    @abstractmethod
    def count_devices(self, segment: str) -> int:
        """Active customers in ``segment`` with a registered push device."""
