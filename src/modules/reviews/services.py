"""Review moderation service.

Approving, rejecting or deleting a review recomputes the product's
``average_rating`` and ``review_count`` from the approved rows that remain.
The product row is locked first, so two moderators acting on reviews of
the same product serialise and the last writer sees the other's change.
The average is rounded half-up to one decimal and is ``0.0`` when no
approved review is left.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.reviews.exceptions import ReviewNotFound

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.catalog.models import Product
    from modules.catalog.repositories.interfaces import IProductRepository
    from modules.reviews.models import Review
    from modules.reviews.repositories.interfaces import IReviewRepository

logger = structlog.get_logger(__name__)

RATING_STEP = Decimal("0.1")


def average_rating(count: int, total: int) -> Decimal:
    if not count:
        return Decimal("0.0")
    return (Decimal(total) / count).quantize(RATING_STEP, rounding=ROUND_HALF_UP)


class ReviewService:
    def __init__(
        self,
        repository: IReviewRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._repo = repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Moderation
    # ------------------------------------------------------------------

    @transaction.atomic
    def approve(self, review_id: str) -> Review:
        review, product = self._lock(review_id)
        if not review.is_approved:
            review.is_approved = True
            self._repo.save(review)
        self._recompute(product)
        logger.info("review.approved", review_id=str(review.id), product_id=str(product.id))
        return review

    @transaction.atomic
    def reject(self, review_id: str) -> None:
        """Rejected reviews are removed outright."""
        review, product = self._lock(review_id)
        self._repo.delete(str(review.id))
        self._recompute(product)
        logger.info("review.rejected", review_id=str(review_id), product_id=str(product.id))

    @transaction.atomic
    def delete_review(self, review_id: str) -> None:
        review, product = self._lock(review_id)
        self._repo.delete(str(review.id))
        self._recompute(product)
        logger.info("review.deleted", review_id=str(review_id), product_id=str(product.id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_reviews(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet:
        return self._repo.list(filters)

    def get_review(self, review_id: str) -> Review:
        review = self._repo.get_by_id(review_id)
        if review is None:
            raise ReviewNotFound(f"Review {review_id} not found.")
        return review

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lock(self, review_id: str) -> tuple[Review, Product]:
        review = self.get_review(review_id)
        product = self._product_repo.get_for_update(str(review.product_id))
        # re-read under the product lock; a concurrent moderator may have
        # removed it in the meantime
        review = self.get_review(review_id)
        return review, product

    def _recompute(self, product: Product) -> None:
        count, total = self._repo.approved_stats(str(product.id))
        product.review_count = count
        product.average_rating = average_rating(count, total)
        product.save(update_fields=["review_count", "average_rating"])
        logger.info(
            "product.rating_recomputed",
            product_id=str(product.id),
            review_count=count,
            average_rating=str(product.average_rating),
        )
