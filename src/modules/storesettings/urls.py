"""Store settings URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.storesettings.views import StoreSettingsView

urlpatterns = [
    path("settings", StoreSettingsView.as_view(), name="admin-settings"),
]
