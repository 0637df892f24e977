"""Coupon URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.coupons.views import CouponViewSet

router = SimpleRouter(trailing_slash=False)
router.register("coupons", CouponViewSet, basename="admin-coupon")

urlpatterns = router.urls
