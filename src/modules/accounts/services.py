"""Admin authentication and account management."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

import structlog
from django.db import transaction

from modules.accounts.exceptions import (
    AdminAlreadyExists,
    AdminNotFound,
    InvalidCredentials,
)
from modules.accounts.models import AdminUser
from modules.accounts.tokens import issue_admin_token

if TYPE_CHECKING:
    from modules.accounts.dtos import CreateAdminDTO, LoginDTO
    from modules.accounts.repositories.interfaces import IAdminUserRepository

logger = structlog.get_logger(__name__)


class AdminAuthService:
    """Receives an ``IAdminUserRepository`` via constructor injection."""

    def __init__(self, repository: IAdminUserRepository) -> None:
        self._repo = repository

    def login(self, dto: LoginDTO) -> Dict[str, Any]:
        """Verify credentials and issue an admin access token.

        The same ``InvalidCredentials`` is raised for an unknown email, an
        inactive account and a wrong password so callers cannot probe
        which emails exist.
        """
        admin = self._repo.get_by_email(dto.email)
        if admin is None or not admin.is_active or not admin.check_password(
            dto.password
        ):
            logger.warning("admin.login_failed")
            raise InvalidCredentials("Invalid credentials")

        self._repo.touch_last_login(admin)
        logger.info("admin.logged_in", admin_id=str(admin.id), role=admin.role)
        return {"token": issue_admin_token(admin), "admin": admin}

    @transaction.atomic
    def create_admin(self, dto: CreateAdminDTO) -> AdminUser:
        """Raises ``AdminAlreadyExists`` when the email is taken."""
        if self._repo.get_by_email(dto.email):
            logger.warning("admin.duplicate_email")
            raise AdminAlreadyExists("Admin with this email already exists")

        admin = AdminUser(email=dto.email, name=dto.name, role=dto.role)
        admin.set_password(dto.password)
        admin = self._repo.save(admin)
        logger.info("admin.created", admin_id=str(admin.id), role=admin.role)
        return admin

    def get_admin(self, admin_id: str) -> AdminUser:
        admin = self._repo.get_by_id(admin_id)
        if admin is None:
            raise AdminNotFound(f"Admin {admin_id} not found.")
        return admin
