"""Django ORM implementations of the catalog repositories.

Error handling follows the Null Object pattern: methods return ``None``
instead of raising, and the service layer decides how to translate a
missing entity into an API response.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.utils import timezone

from modules.catalog.models import Category, Product
from modules.catalog.repositories.interfaces import (
    ICategoryRepository,
    IProductRepository,
)

logger = structlog.get_logger(__name__)


class CategoryDjangoRepository(ICategoryRepository):
    def get_by_id(self, id: str) -> Optional[Category]:
        try:
            return Category.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Category.objects.order_by("display_order", "name", "id")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def get_by_slug(self, slug: str) -> Optional[Category]:
        return Category.objects.filter(slug=slug).first()

    def count_products(self, id: str) -> int:
        return Product.objects.filter(category_id=id).count()

    @transaction.atomic
    def save(self, entity: Category) -> Category:
        entity.save()
        logger.info("category.saved", category_id=str(entity.id), slug=entity.slug)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Hard delete; children keep existing with ``parent = NULL``."""
        deleted, _ = Category.objects.filter(id=id).delete()
        return deleted > 0


class ProductDjangoRepository(IProductRepository):
    def get_by_id(self, id: str) -> Optional[Product]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return Product.objects.select_related("category").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"is_active": True}
            {"name__icontains": "widget"}
        """
        queryset = Product.objects.select_related("category").order_by(
            "-created_at", "-id"
        )
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def get_by_sku(self, sku: str) -> Optional[Product]:
        """Case-insensitive via upper normalisation."""
        return Product.objects.filter(sku=sku.strip().upper()).first()

    def get_by_slug(self, slug: str) -> Optional[Product]:
        return Product.objects.filter(slug=slug).first()

    def get_for_update(self, id: str) -> Optional[Product]:
        try:
            return Product.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        entity.save()
        logger.info("product.saved", product_id=str(entity.id), sku=entity.sku)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Soft delete: the product stays referenced by orders and reviews."""
        updated = Product.objects.filter(id=id).update(
            is_active=False, updated_at=timezone.now()
        )
        if updated:
            logger.info("product.deactivated", product_id=str(id))
        return updated > 0
