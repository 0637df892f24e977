"""Catalog exceptions.

Raised by the services when business rules are violated; the views
translate them into error envelopes.
"""

from __future__ import annotations


class CategoryNotFound(Exception):
    """The requested category does not exist."""


class CategoryAlreadyExists(Exception):
    """Another category already uses the slug."""


class CategoryHasProducts(Exception):
    """The category is still referenced by at least one product."""


class InvalidCategoryParent(Exception):
    """The parent category does not exist or would create a cycle."""


class ProductNotFound(Exception):
    """The requested product does not exist."""


class ProductAlreadyExists(Exception):
    """Another product already uses the SKU or slug."""
