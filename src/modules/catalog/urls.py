"""Catalog URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.catalog.views import CategoryViewSet, ProductViewSet

router = SimpleRouter(trailing_slash=False)
router.register("categories", CategoryViewSet, basename="admin-category")
router.register("products", ProductViewSet, basename="admin-product")

urlpatterns = router.urls
