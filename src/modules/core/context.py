"""Request-scoped admin identity.

``AdminContext`` is built from verified token claims by
``AdminJWTAuthentication`` and exposed as ``request.user``.  It is frozen:
handlers read it and pass it on to services, nothing mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AdminContext:
    admin_id: str
    role: str

    # DRF checks
    is_authenticated = True
    is_active = True

    def has_role(self, *roles: str) -> bool:
        return self.role in roles

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.admin_id} ({self.role})"
