"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into error envelopes; the
view never swallows generic exceptions.  Orders are created by checkout,
so the admin surface is list, detail and status transitions only.
"""

from __future__ import annotations

from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.catalog.repositories.django_repository import ProductDjangoRepository
from modules.core.responses import errors, success
from modules.coupons.repositories.django_repository import CouponDjangoRepository
from modules.coupons.services import CouponService
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import UpdateOrderStatusDTO
from modules.orders.exceptions import InvalidOrderStatus, OrderNotFound
from modules.orders.filters import OrderFilter
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import OrderListSerializer, OrderSerializer
from modules.orders.services import OrderService


class OrderViewSet(ListModelMixin, GenericViewSet):
    """Uses ``OrderService`` with injected repositories (DIP)."""

    filterset_class = OrderFilter
    serializer_class = OrderListSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            coupon_service=CouponService(repository=CouponDjangoRepository()),
        )

    def get_queryset(self):
        return self._service.list_orders()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/admin/orders/{pk}"""
        try:
            order = self._service.get_order(pk)
        except OrderNotFound:
            return errors.not_found("Order")
        return success(OrderSerializer(order).data)

    @action(detail=True, methods=["put"], url_path="status")
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/admin/orders/{pk}/status

        Body: ``{"status": "...", "notes": "..."}``.  Rejected transitions
        are ``BAD_REQUEST``; an unknown status value is ``VALIDATION_ERROR``.
        """
        dto = UpdateOrderStatusDTO.model_validate(request.data)
        try:
            order = self._service.transition(pk, dto, actor_id=request.user.admin_id)
        except OrderNotFound:
            return errors.not_found("Order")
        except InvalidOrderStatus as exc:
            return errors.bad_request(str(exc))
        return success(OrderSerializer(order).data)
