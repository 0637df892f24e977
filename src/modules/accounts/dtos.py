"""Admin account DTOs (Pydantic v2, immutable)."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.accounts.constants import AdminRole

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_RE.match(value):
        raise ValueError("Enter a valid email address.")
    return value


class LoginDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str
    password: str = Field(min_length=8)

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str) -> str:
        return normalize_email(v)


class CreateAdminDTO(BaseModel):
    """Input for ``POST /admin/admins`` (super admins only)."""

    model_config = ConfigDict(frozen=True)

    email: str
    password: str = Field(min_length=8)
    name: str = Field(min_length=1, max_length=100)
    role: AdminRole

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str) -> str:
        return normalize_email(v)
