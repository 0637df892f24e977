"""Dashboard URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.dashboard.views import (
    DashboardStatsView,
    LowStockProductsView,
    RecentOrdersView,
    SalesView,
    TopSellingProductsView,
)

urlpatterns = [
    path("dashboard/stats", DashboardStatsView.as_view(), name="dashboard-stats"),
    path("dashboard/orders", RecentOrdersView.as_view(), name="dashboard-orders"),
    path("dashboard/sales", SalesView.as_view(), name="dashboard-sales"),
    path(
        "dashboard/products/low-stock",
        LowStockProductsView.as_view(),
        name="dashboard-low-stock",
    ),
    path(
        "dashboard/products/top-selling",
        TopSellingProductsView.as_view(),
        name="dashboard-top-selling",
    ),
]
