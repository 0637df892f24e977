"""Admin access token issuance.

Tokens are SimpleJWT ``AccessToken`` instances (HS256, ``exp``/``jti``
handled by SimpleJWT) carrying the admin id in ``sub``, the ``role`` and
``type="admin_access"``.  ``AdminJWTAuthentication`` accepts nothing else.
"""

from __future__ import annotations

from django.conf import settings
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from modules.accounts.models import AdminUser


def issue_admin_token(admin: AdminUser) -> str:
    token = AccessToken()
    token[api_settings.USER_ID_CLAIM] = str(admin.id)
    token["role"] = admin.role
    token["type"] = settings.ADMIN_TOKEN_TYPE
    return str(token)
