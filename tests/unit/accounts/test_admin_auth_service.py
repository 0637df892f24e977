"""Unit tests for AdminAuthService and admin token issuance."""

from __future__ import annotations

import pytest
from django.conf import settings
from rest_framework_simplejwt.tokens import AccessToken

from modules.accounts.constants import AdminRole
from modules.accounts.dtos import CreateAdminDTO, LoginDTO
from modules.accounts.exceptions import AdminAlreadyExists, InvalidCredentials
from modules.accounts.repositories.django_repository import AdminUserDjangoRepository
from modules.accounts.services import AdminAuthService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return AdminAuthService(repository=AdminUserDjangoRepository())


class TestLogin:
    def test_issues_admin_access_token(self, service, admin_user, admin_password):
        result = service.login(LoginDTO(email=admin_user.email, password=admin_password))

        token = AccessToken(result["token"])
        assert token["sub"] == str(admin_user.id)
        assert token["role"] == AdminRole.SUPER_ADMIN
        assert token["type"] == settings.ADMIN_TOKEN_TYPE
        assert result["admin"].id == admin_user.id

    def test_records_last_login(self, service, admin_user, admin_password):
        service.login(LoginDTO(email=admin_user.email, password=admin_password))

        admin_user.refresh_from_db()
        assert admin_user.last_login_at is not None

    def test_email_is_case_insensitive(self, service, admin_user, admin_password):
        service.login(LoginDTO(email="OWNER@Example.com", password=admin_password))

    @pytest.mark.parametrize(
        "email, password",
        [
            ("owner@example.com", "wrong-password"),
            ("nobody@example.com", None),
        ],
    )
    def test_same_error_for_every_failure(
        self, service, admin_user, admin_password, email, password
    ):
        with pytest.raises(InvalidCredentials, match="Invalid credentials"):
            service.login(LoginDTO(email=email, password=password or admin_password))

    def test_inactive_admin_cannot_login(self, service, admin_user, admin_password):
        admin_user.is_active = False
        admin_user.save()

        with pytest.raises(InvalidCredentials):
            service.login(LoginDTO(email=admin_user.email, password=admin_password))


class TestCreateAdmin:
    def test_password_is_hashed(self, service):
        admin = service.create_admin(
            CreateAdminDTO(
                email="new@example.com",
                password="long-enough-pw",
                name="New Admin",
                role=AdminRole.MANAGER,
            )
        )
        assert admin.password_hash != "long-enough-pw"
        assert admin.check_password("long-enough-pw")

    def test_duplicate_email(self, service, admin_user):
        with pytest.raises(AdminAlreadyExists):
            service.create_admin(
                CreateAdminDTO(
                    email=admin_user.email,
                    password="long-enough-pw",
                    name="Dup",
                    role=AdminRole.ADMIN,
                )
            )
