"""Admin dashboard views (``/admin/dashboard/...``)."""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.catalog.serializers import ProductSerializer
from modules.core.responses import success
from modules.dashboard.dtos import SalesQuery
from modules.dashboard.repositories.django_repository import DashboardDjangoRepository
from modules.dashboard.services import DashboardService
from modules.orders.serializers import OrderListSerializer


class _DashboardView(APIView):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = DashboardService(repository=DashboardDjangoRepository())


class DashboardStatsView(_DashboardView):
    def get(self, request: Request) -> Response:
        return success(self._service.stats())


class RecentOrdersView(_DashboardView):
    def get(self, request: Request) -> Response:
        orders = self._service.recent_orders()
        return success(OrderListSerializer(orders, many=True).data)


class SalesView(_DashboardView):
    def get(self, request: Request) -> Response:
        query = SalesQuery.model_validate(request.query_params.dict())
        return success(self._service.sales(query))


class LowStockProductsView(_DashboardView):
    def get(self, request: Request) -> Response:
        products = self._service.low_stock_products()
        return success(ProductSerializer(products, many=True).data)


class TopSellingProductsView(_DashboardView):
    def get(self, request: Request) -> Response:
        return success(self._service.top_selling())
