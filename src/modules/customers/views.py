"""Storefront customer views (``/admin/users``).

Domain exceptions are caught and translated into the error envelope;
the view never swallows generic exceptions.
"""

from __future__ import annotations

from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.responses import errors, success
from modules.customers.dtos import UpdateCustomerStatusDTO
from modules.customers.exceptions import CustomerNotFound
from modules.customers.filters import CustomerFilter
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CustomerDetailSerializer, CustomerSerializer
from modules.customers.services import CustomerService
from modules.orders.serializers import OrderListSerializer


class CustomerViewSet(ListModelMixin, GenericViewSet):
    filterset_class = CustomerFilter
    serializer_class = CustomerSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    def get_queryset(self):
        return self._service.list_customers().order_by("-created_at", "-id")

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/admin/users/{pk}"""
        try:
            result = self._service.get_customer(pk)
        except CustomerNotFound:
            return errors.not_found("User")
        serializer = CustomerDetailSerializer(
            result["customer"], context={"orders_count": result["orders_count"]}
        )
        return success(serializer.data)

    @action(detail=True, methods=["put"], url_path="status")
    def set_status(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/admin/users/{pk}/status"""
        dto = UpdateCustomerStatusDTO.model_validate(request.data)
        try:
            customer = self._service.set_status(pk, dto)
        except CustomerNotFound:
            return errors.not_found("User")
        verb = "activated" if customer.is_active else "deactivated"
        return success({"message": f"User {verb}", "is_active": customer.is_active})

    @action(detail=True, methods=["get"], url_path="orders")
    def orders(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/admin/users/{pk}/orders"""
        try:
            queryset = self._service.list_orders(pk)
        except CustomerNotFound:
            return errors.not_found("User")
        page = self.paginate_queryset(queryset)
        return self.get_paginated_response(OrderListSerializer(page, many=True).data)
