"""Admin authentication views.

``POST /admin/login`` is the only admin route reachable without a token;
it is rate limited through the ``admin_login`` throttle scope.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.constants import AdminRole
from modules.accounts.dtos import CreateAdminDTO, LoginDTO
from modules.accounts.exceptions import (
    AdminAlreadyExists,
    AdminNotFound,
    InvalidCredentials,
)
from modules.accounts.repositories.django_repository import AdminUserDjangoRepository
from modules.accounts.serializers import AdminSummarySerializer, AdminUserSerializer
from modules.accounts.services import AdminAuthService
from modules.core.permissions import require_role
from modules.core.responses import errors, success


def _service() -> AdminAuthService:
    return AdminAuthService(repository=AdminUserDjangoRepository())


class AdminLoginView(APIView):
    authentication_classes: list = []
    permission_classes = [AllowAny]
    throttle_scope = "admin_login"

    def post(self, request: Request) -> Response:
        """POST /api/v1/admin/login"""
        dto = LoginDTO.model_validate(request.data)
        try:
            result = _service().login(dto)
        except InvalidCredentials as exc:
            return errors.unauthorized(str(exc))

        return success(
            {
                "token": result["token"],
                "admin": AdminSummarySerializer(result["admin"]).data,
            }
        )


class AdminCreateView(APIView):
    permission_classes = [require_role(AdminRole.SUPER_ADMIN)]

    def post(self, request: Request) -> Response:
        """POST /api/v1/admin/admins"""
        dto = CreateAdminDTO.model_validate(request.data)
        try:
            admin = _service().create_admin(dto)
        except AdminAlreadyExists as exc:
            return errors.conflict(str(exc))
        return success(AdminUserSerializer(admin).data, status=status.HTTP_201_CREATED)


class AdminMeView(APIView):
    def get(self, request: Request) -> Response:
        """GET /api/v1/admin/me"""
        try:
            admin = _service().get_admin(request.user.admin_id)
        except AdminNotFound:
            return errors.not_found("Admin")
        return success(AdminUserSerializer(admin).data)
