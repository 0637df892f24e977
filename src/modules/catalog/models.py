"""Category tree and product catalog.

Business rules implemented:
- Category ``slug`` and product ``sku``/``slug`` are unique.
- A category that still has products cannot be deleted (checked by the
  service; ``PROTECT`` on ``Product.category`` backs it at the database).
- Deleting a category orphans its children (``SET_NULL``) instead of
  cascading.
- ``average_rating``/``review_count`` are derived from approved reviews
  and only ever written by the review moderation service.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Category(BaseModel):
    parent = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="children",
    )
    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True)
    description = models.CharField(max_length=500, blank=True, default="")
    image_url = models.TextField(blank=True, default="")
    display_order = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "categories"
        ordering = ["display_order", "name"]

    def __str__(self) -> str:
        return self.name


class Product(BaseModel):
    """Product as managed from the admin console.

    ``sku`` is normalised to uppercase on save to prevent visual duplicates
    (e.g. "sku-01" vs "SKU-01").
    """

    sku = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=200, unique=True)
    short_description = models.CharField(max_length=500)
    long_description = models.TextField(blank=True, default="")
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    sale_price = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="products",
    )
    brand = models.CharField(max_length=100, blank=True, default="")
    stock_quantity = models.PositiveIntegerField(default=0)
    is_featured = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    average_rating = models.DecimalField(
        max_digits=2, decimal_places=1, default=Decimal("0.0"), editable=False
    )
    review_count = models.PositiveIntegerField(default=0, editable=False)

    class Meta:
        db_table = "products"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active"], name="products_active_idx"),
            models.Index(fields=["category"], name="products_category_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(base_price__gt=0),
                name="products_base_price_positive",
            ),
        ]

    @property
    def effective_price(self) -> Decimal:
        return self.sale_price if self.sale_price is not None else self.base_price

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        if self.sku:
            self.sku = self.sku.strip().upper()
        super().save(*args, **kwargs)
        if is_new:
            logger.info("product_created", product_id=str(self.id), sku=self.sku)

    def __str__(self) -> str:
        return f"{self.sku} - {self.name}"
