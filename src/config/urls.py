from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from django.urls import include, path

admin_patterns = [
    path("", include("modules.accounts.urls")),
    path("", include("modules.customers.urls")),
    path("", include("modules.catalog.urls")),
    path("", include("modules.coupons.urls")),
    path("", include("modules.orders.urls")),
    path("", include("modules.reviews.urls")),
    path("", include("modules.banners.urls")),
    path("", include("modules.notifications.urls")),
    path("", include("modules.storesettings.urls")),
    path("", include("modules.dashboard.urls")),
]

urlpatterns = [
    path("", include("modules.core.urls")),
    # Admin console API (versioned)
    path("api/v1/admin/", include(admin_patterns)),
    # OpenAPI schema & docs (public)
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
]

handler404 = "modules.core.views.endpoint_not_found"
handler500 = "modules.core.views.server_error"
