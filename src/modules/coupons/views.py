"""Coupon API views.

Domain exceptions are caught and translated into error envelopes: an
unknown code is ``NOT_FOUND``, every other reason a coupon cannot be
applied is ``BAD_REQUEST`` carrying the reason as message.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.responses import errors, success
from modules.coupons.dtos import CreateCouponDTO, UpdateCouponDTO, ValidateCouponDTO
from modules.coupons.exceptions import (
    CouponAlreadyExists,
    CouponNotApplicable,
    CouponNotFound,
    InvalidCoupon,
)
from modules.coupons.filters import CouponFilter
from modules.coupons.repositories.django_repository import CouponDjangoRepository
from modules.coupons.serializers import CouponDetailSerializer, CouponSerializer
from modules.coupons.services import CouponService


class CouponViewSet(ListModelMixin, GenericViewSet):
    filterset_class = CouponFilter
    serializer_class = CouponSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CouponService(repository=CouponDjangoRepository())

    def get_queryset(self):
        return self._service.list_coupons()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/admin/coupons/{pk} (with usage history)"""
        try:
            coupon = self._service.get_coupon(pk)
        except CouponNotFound:
            return errors.not_found("Coupon")
        serializer = CouponDetailSerializer(
            coupon, context={"usages": self._service.usage_history(coupon)}
        )
        return success(serializer.data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/admin/coupons"""
        dto = CreateCouponDTO.model_validate(request.data)
        try:
            coupon = self._service.create_coupon(dto)
        except CouponAlreadyExists as exc:
            return errors.conflict(str(exc))
        return success(CouponSerializer(coupon).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/admin/coupons/{pk}"""
        dto = UpdateCouponDTO.model_validate(request.data)
        try:
            coupon = self._service.update_coupon(pk, dto)
        except CouponNotFound:
            return errors.not_found("Coupon")
        except CouponAlreadyExists as exc:
            return errors.conflict(str(exc))
        except InvalidCoupon as exc:
            return errors.bad_request(str(exc))
        return success(CouponSerializer(coupon).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/admin/coupons/{pk}"""
        try:
            self._service.delete_coupon(pk)
        except CouponNotFound:
            return errors.not_found("Coupon")
        return success({"message": "Coupon deleted"})

    @action(detail=False, methods=["post"], url_path="validate")
    def validate_code(self, request: Request) -> Response:
        """POST /api/v1/admin/coupons/validate

        Previews the discount a code yields for an order amount (and
        optionally a customer) without consuming it.
        """
        dto = ValidateCouponDTO.model_validate(request.data)
        try:
            quote = self._service.validate(
                dto.code,
                dto.order_amount,
                str(dto.user_id) if dto.user_id else None,
            )
        except CouponNotFound:
            return errors.not_found("Coupon")
        except CouponNotApplicable as exc:
            return errors.bad_request(str(exc))
        return success(quote.as_dict())
