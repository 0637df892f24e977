"""Catalog repository interfaces."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.catalog.models import Category, Product


class ICategoryRepository(IRepository["Category"]):
    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Category]":
        """Categories ordered by ``display_order, name``."""

    @abstractmethod
    def get_by_slug(self, slug: str) -> Optional[Category]:
        """Retrieve a category by slug."""

    @abstractmethod
    def count_products(self, id: str) -> int:
        """Number of products (active or not) referencing the category."""


class IProductRepository(IRepository["Product"]):
    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Product]":
        """List products with optional filters."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Optional[Product]:
        """Retrieve a product by SKU."""

    @abstractmethod
    def get_by_slug(self, slug: str) -> Optional[Product]:
        """Retrieve a product by slug."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE).

        Used by checkout (stock deduction) and review moderation (rating
        recomputation) to serialise writes to the product row.
        Returns ``None`` if the product does not exist.
        """
