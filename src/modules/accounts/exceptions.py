"""Admin account exceptions."""

from __future__ import annotations


class InvalidCredentials(Exception):
    """Unknown email, inactive admin or wrong password."""


class AdminAlreadyExists(Exception):
    """An admin with the same email already exists."""


class AdminNotFound(Exception):
    """The requested admin does not exist."""
