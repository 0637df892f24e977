"""Django ORM implementation of the Review repository."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import Count, Sum

from modules.reviews.models import Review
from modules.reviews.repositories.interfaces import IReviewRepository

logger = structlog.get_logger(__name__)


class ReviewDjangoRepository(IReviewRepository):
    def get_by_id(self, id: str) -> Optional[Review]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return Review.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Review.objects.select_related("product", "customer").order_by(
            "-created_at", "-id"
        )
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Review) -> Review:
        entity.save()
        logger.info("review.saved", review_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        deleted, _ = Review.objects.filter(id=id).delete()
        return deleted > 0

    def approved_stats(self, product_id: str) -> Tuple[int, int]:
        stats = Review.objects.filter(product_id=product_id, is_approved=True).aggregate(
            count=Count("id"), total=Sum("rating")
        )
        return stats["count"] or 0, stats["total"] or 0
