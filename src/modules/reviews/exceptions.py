from __future__ import annotations


class ReviewNotFound(Exception):
    """The requested review does not exist."""
