"""Banner repository interface."""

from __future__ import annotations

from modules.core.repositories.interfaces import IRepository


class IBannerRepository(IRepository["Banner"]):
    """Plain CRUD; list order is ``display_order`` then newest first."""
