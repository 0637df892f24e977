"""Review repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.reviews.models import Review


class IReviewRepository(IRepository["Review"]):
    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Review]":
        """Reviews newest first, with product and customer joined."""

    @abstractmethod
    def approved_stats(self, product_id: str) -> Tuple[int, int]:
        """``(count, rating_sum)`` over the product's approved reviews."""
