from django.urls import path

from modules.accounts.views import AdminCreateView, AdminLoginView, AdminMeView

urlpatterns = [
    path("login", AdminLoginView.as_view(), name="admin-login"),
    path("admins", AdminCreateView.as_view(), name="admin-create"),
    path("me", AdminMeView.as_view(), name="admin-me"),
]
