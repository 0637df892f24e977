"""Order URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.orders.views import OrderViewSet

router = SimpleRouter(trailing_slash=False)
router.register("orders", OrderViewSet, basename="admin-order")

urlpatterns = router.urls
