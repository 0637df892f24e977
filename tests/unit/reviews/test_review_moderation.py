"""Unit tests for review moderation and the product rating aggregate."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.catalog.repositories.django_repository import ProductDjangoRepository
from modules.reviews.models import Review
from modules.reviews.repositories.django_repository import ReviewDjangoRepository
from modules.reviews.services import ReviewService, average_rating
from modules.reviews.exceptions import ReviewNotFound

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return ReviewService(
        repository=ReviewDjangoRepository(),
        product_repository=ProductDjangoRepository(),
    )


@pytest.fixture()
def make_review(product, customer):
    def _make(rating, **overrides):
        data = {
            "product": product,
            "customer": customer,
            "rating": rating,
            "content": "Does what it says.",
        }
        data.update(overrides)
        return Review.objects.create(**data)

    return _make


class TestAverageRating:
    def test_no_reviews_is_zero(self):
        assert average_rating(0, 0) == Decimal("0.0")

    def test_rounds_half_up_to_one_decimal(self):
        # 4 + 4 + 5 + 5 + 4 + 4 = 26 / 6 = 4.333...
        assert average_rating(6, 26) == Decimal("4.3")
        # 4 + 5 + 4 + 5 + 5 + 4 + 4 + 5 = 36 / 8 = 4.5
        assert average_rating(8, 36) == Decimal("4.5")
        # 3 + 4 + 4 + 4 = 15 / 4 = 3.75
        assert average_rating(4, 15) == Decimal("3.8")


class TestModeration:
    def test_approving_updates_aggregate(self, service, make_review, product):
        first = make_review(4)
        second = make_review(5)

        service.approve(str(first.id))
        service.approve(str(second.id))

        product.refresh_from_db()
        assert product.review_count == 2
        assert product.average_rating == Decimal("4.5")

    def test_pending_reviews_do_not_count(self, service, make_review, product):
        approved = make_review(2)
        make_review(5)

        service.approve(str(approved.id))

        product.refresh_from_db()
        assert product.review_count == 1
        assert product.average_rating == Decimal("2.0")

    def test_approve_is_idempotent(self, service, make_review, product):
        review = make_review(3)

        service.approve(str(review.id))
        service.approve(str(review.id))

        product.refresh_from_db()
        assert product.review_count == 1

    def test_reject_deletes_and_recomputes(self, service, make_review, product):
        kept = make_review(2)
        rejected = make_review(5)
        service.approve(str(kept.id))
        service.approve(str(rejected.id))

        service.reject(str(rejected.id))

        assert not Review.objects.filter(id=rejected.id).exists()
        product.refresh_from_db()
        assert product.review_count == 1
        assert product.average_rating == Decimal("2.0")

    def test_reject_pending_review_keeps_aggregate(
        self, service, make_review, product
    ):
        for review in (make_review(4), make_review(5)):
            service.approve(str(review.id))
        pending = make_review(1)

        service.reject(str(pending.id))

        assert not Review.objects.filter(id=pending.id).exists()
        product.refresh_from_db()
        assert (product.average_rating, product.review_count) == (Decimal("4.5"), 2)

    def test_reject_third_approved_review(self, service, make_review, product):
        for review in (make_review(4), make_review(5)):
            service.approve(str(review.id))
        third = make_review(3)
        service.approve(str(third.id))
        product.refresh_from_db()
        assert (product.average_rating, product.review_count) == (Decimal("4.0"), 3)

        service.reject(str(third.id))

        product.refresh_from_db()
        assert (product.average_rating, product.review_count) == (Decimal("4.5"), 2)

    def test_deleting_last_review_resets_aggregate(
        self, service, make_review, product
    ):
        review = make_review(4)
        service.approve(str(review.id))

        service.delete_review(str(review.id))

        product.refresh_from_db()
        assert product.review_count == 0
        assert product.average_rating == Decimal("0.0")

    def test_unknown_review(self, service):
        with pytest.raises(ReviewNotFound):
            service.approve(str(uuid4()))

    def test_malformed_id_is_not_found(self, service):
        with pytest.raises(ReviewNotFound):
            service.delete_review("not-a-uuid")
