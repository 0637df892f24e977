"""Review moderation views (``/admin/reviews``)."""

from __future__ import annotations

from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.catalog.repositories.django_repository import ProductDjangoRepository
from modules.core.responses import errors, success
from modules.reviews.exceptions import ReviewNotFound
from modules.reviews.filters import ReviewFilter
from modules.reviews.repositories.django_repository import ReviewDjangoRepository
from modules.reviews.serializers import ReviewSerializer
from modules.reviews.services import ReviewService


class ReviewViewSet(ListModelMixin, GenericViewSet):
    filterset_class = ReviewFilter
    serializer_class = ReviewSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ReviewService(
            repository=ReviewDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    def get_queryset(self):
        return self._service.list_reviews()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        try:
            review = self._service.get_review(pk)
        except ReviewNotFound:
            return errors.not_found("Review")
        return success(ReviewSerializer(review).data)

    @action(detail=True, methods=["put"], url_path="approve")
    def approve(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/admin/reviews/{pk}/approve"""
        try:
            self._service.approve(pk)
        except ReviewNotFound:
            return errors.not_found("Review")
        return success({"message": "Review approved"})

    @action(detail=True, methods=["put"], url_path="reject")
    def reject(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/admin/reviews/{pk}/reject"""
        try:
            self._service.reject(pk)
        except ReviewNotFound:
            return errors.not_found("Review")
        return success({"message": "Review rejected and deleted"})

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/admin/reviews/{pk}"""
        try:
            self._service.delete_review(pk)
        except ReviewNotFound:
            return errors.not_found("Review")
        return success({"message": "Review deleted"})
