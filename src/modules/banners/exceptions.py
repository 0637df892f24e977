from __future__ import annotations


class BannerNotFound(Exception):
    """The requested banner does not exist."""


class InvalidBannerWindow(Exception):
    """``ends_at`` precedes ``starts_at``."""
