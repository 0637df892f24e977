"""Banner URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.banners.views import BannerViewSet

router = SimpleRouter(trailing_slash=False)
router.register("banners", BannerViewSet, basename="admin-banner")

urlpatterns = router.urls
