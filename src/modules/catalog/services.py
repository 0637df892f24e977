"""Catalog service layer (use cases).

Business rules enforced here:
- Category slugs, product SKUs and product slugs are unique (CONFLICT).
- A category referenced by any product cannot be deleted; suspending it
  through ``toggle_status`` is the non-destructive alternative.
- Product deletion is a soft delete (``is_active = False``) so that order
  items and reviews keep their reference.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.catalog.exceptions import (
    CategoryAlreadyExists,
    CategoryHasProducts,
    CategoryNotFound,
    InvalidCategoryParent,
    ProductAlreadyExists,
    ProductNotFound,
)
from modules.catalog.models import Category, Product

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.catalog.dtos import (
        CreateCategoryDTO,
        CreateProductDTO,
        UpdateCategoryDTO,
        UpdateProductDTO,
    )
    from modules.catalog.repositories.interfaces import (
        ICategoryRepository,
        IProductRepository,
    )

logger = structlog.get_logger(__name__)

CATEGORY_HAS_PRODUCTS_MESSAGE = (
    "Cannot delete category with products. Remove products first or use suspend."
)


class CategoryService:
    """Receives an ``ICategoryRepository`` via constructor injection (DIP)."""

    def __init__(self, repository: ICategoryRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_category(self, dto: CreateCategoryDTO) -> Category:
        """Raises ``CategoryAlreadyExists`` or ``InvalidCategoryParent``."""
        log = logger.bind(slug=dto.slug)
        if self._repo.get_by_slug(dto.slug):
            log.warning("category.duplicate_slug")
            raise CategoryAlreadyExists("Category with this slug already exists")

        data = dto.model_dump()
        parent_id = data.pop("parent_id")
        category = Category(**data)
        category.parent = self._resolve_parent(category, parent_id)
        category = self._repo.save(category)
        log.info("category.created", category_id=str(category.id))
        return category

    @transaction.atomic
    def update_category(self, id: str, dto: UpdateCategoryDTO) -> Category:
        category = self.get_category(id)
        changes = dto.model_dump(exclude_unset=True)
        log = logger.bind(category_id=str(id))

        slug = changes.get("slug")
        if slug and slug != category.slug:
            existing = self._repo.get_by_slug(slug)
            if existing and existing.id != category.id:
                log.warning("category.duplicate_slug", slug=slug)
                raise CategoryAlreadyExists("Category with this slug already exists")

        if "parent_id" in changes:
            category.parent = self._resolve_parent(category, changes.pop("parent_id"))

        for field, value in changes.items():
            if value is None:
                continue
            setattr(category, field, value)

        category = self._repo.save(category)
        log.info("category.updated", fields=sorted(changes))
        return category

    @transaction.atomic
    def delete_category(self, id: str) -> None:
        """Hard delete guarded by the product reference count.

        Raises:
            CategoryNotFound: the category does not exist.
            CategoryHasProducts: at least one product still references it.
        """
        category = self.get_category(id)
        product_count = self._repo.count_products(str(category.id))
        if product_count > 0:
            logger.warning(
                "category.delete_blocked",
                category_id=str(id),
                product_count=product_count,
            )
            raise CategoryHasProducts(CATEGORY_HAS_PRODUCTS_MESSAGE)

        self._repo.delete(str(category.id))
        logger.info("category.deleted", category_id=str(id))

    @transaction.atomic
    def toggle_status(self, id: str) -> Category:
        """Flip ``is_active``; never deletes."""
        category = self.get_category(id)
        category.is_active = not category.is_active
        category = self._repo.save(category)
        logger.info(
            "category.status_toggled",
            category_id=str(id),
            is_active=category.is_active,
        )
        return category

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_categories(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet:
        return self._repo.list(filters)

    def get_category(self, id: str) -> Category:
        category = self._repo.get_by_id(id)
        if not category:
            raise CategoryNotFound(f"Category {id} not found.")
        return category

    def _resolve_parent(self, category: Category, parent_id) -> Optional[Category]:
        if parent_id is None:
            return None
        parent = self._repo.get_by_id(str(parent_id))
        if parent is None:
            raise InvalidCategoryParent("Parent category not found")

        # Walk up from the new parent; reaching ``category`` means a cycle.
        node: Optional[Category] = parent
        while node is not None:
            if node.id == category.id:
                raise InvalidCategoryParent("A category cannot be its own ancestor")
            node = node.parent
        return parent


class ProductService:
    """Receives product and category repositories via constructor injection."""

    def __init__(
        self,
        repository: IProductRepository,
        category_repository: ICategoryRepository,
    ) -> None:
        self._repo = repository
        self._category_repo = category_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a product after enforcing uniqueness rules.

        Raises:
            ProductAlreadyExists: SKU or slug already taken.
            CategoryNotFound: ``category_id`` does not resolve.
        """
        log = logger.bind(sku=dto.sku)
        self._ensure_unique(sku=dto.sku, slug=dto.slug)

        data = dto.model_dump()
        category_id = data.pop("category_id")
        product = Product(**data)
        product.category = self._resolve_category(category_id)
        product = self._repo.save(product)
        log.info("product.created", product_id=str(product.id))
        return product

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        product = self.get_product(id)
        changes = dto.model_dump(exclude_unset=True)
        log = logger.bind(product_id=str(id))

        self._ensure_unique(
            sku=changes.get("sku"), slug=changes.get("slug"), exclude=product
        )

        if "category_id" in changes:
            product.category = self._resolve_category(changes.pop("category_id"))

        for field, value in changes.items():
            # ``sale_price`` is the only nullable column the console clears.
            if value is None and field != "sale_price":
                continue
            setattr(product, field, value)

        product = self._repo.save(product)
        log.info("product.updated", fields=sorted(changes))
        return product

    @transaction.atomic
    def delete_product(self, id: str) -> None:
        """Soft-delete a product."""
        product = self.get_product(id)
        self._repo.delete(str(product.id))
        logger.info("product.soft_deleted", product_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet:
        return self._repo.list(filters)

    def get_product(self, id: str) -> Product:
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def _ensure_unique(
        self,
        sku: Optional[str] = None,
        slug: Optional[str] = None,
        exclude: Optional[Product] = None,
    ) -> None:
        if sku:
            existing = self._repo.get_by_sku(sku)
            if existing and (exclude is None or existing.id != exclude.id):
                logger.warning("product.duplicate_sku", sku=sku)
                raise ProductAlreadyExists(f"SKU '{sku}' already registered.")
        if slug:
            existing = self._repo.get_by_slug(slug)
            if existing and (exclude is None or existing.id != exclude.id):
                logger.warning("product.duplicate_slug", slug=slug)
                raise ProductAlreadyExists(f"Slug '{slug}' already registered.")

    def _resolve_category(self, category_id) -> Optional[Category]:
        if category_id is None:
            return None
        category = self._category_repo.get_by_id(str(category_id))
        if category is None:
            raise CategoryNotFound(f"Category {category_id} not found.")
        return category
