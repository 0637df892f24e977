"""Admin bearer-token authentication for Django REST Framework.

Tokens are HS256 JWTs issued by ``modules.accounts.tokens`` at login and
validated with SimpleJWT (signature, expiry, ``token_type``).  On top of
that an admin route only accepts tokens whose ``type`` claim is
``admin_access``; the verified claims become an immutable
``AdminContext`` exposed as ``request.user``.

Security decisions
------------------
* **Fail Closed**: a malformed header, bad signature, expired token or
  wrong token type all return 401.  Only a missing header falls through to
  DRF's ``NotAuthenticated`` (also 401).
* No database hit per request: the role travels in the signed token.
"""

import structlog
from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings

from modules.core.context import AdminContext

logger = structlog.get_logger(__name__)


class AdminJWTAuthentication(JWTAuthentication):
    """DRF authentication class that turns an admin JWT into an ``AdminContext``."""

    www_authenticate_realm = "api"

    def authenticate(self, request):
        """Return ``(AdminContext, token)`` or ``None`` (no credentials)."""
        header = self.get_header(request)
        if header is None:
            return None  # DRF raises NotAuthenticated

        raw_token = self.get_raw_token(header)
        if raw_token is None:
            raise AuthenticationFailed("Missing or invalid authorization header")

        try:
            validated_token = self.get_validated_token(raw_token)
        except InvalidToken as exc:
            logger.warning("admin_token_rejected", reason="invalid_or_expired")
            raise AuthenticationFailed("Invalid or expired token") from exc

        admin = self.get_user(validated_token)
        logger.info("admin_authenticated", admin_id=admin.admin_id, role=admin.role)
        return (admin, validated_token)

    def get_user(self, validated_token) -> AdminContext:
        if validated_token.get("type") != settings.ADMIN_TOKEN_TYPE:
            logger.warning("admin_token_rejected", reason="wrong_type")
            raise AuthenticationFailed("Invalid token type")

        admin_id = validated_token.get(api_settings.USER_ID_CLAIM)
        role = validated_token.get("role")
        if not admin_id or not role:
            raise AuthenticationFailed("Invalid token claims")
        return AdminContext(admin_id=str(admin_id), role=str(role))
