"""Catalog DTOs for the service layer.

Framework-agnostic data transfer objects using Pydantic v2.  DTOs are
immutable (``frozen=True``).  Update DTOs declare every field optional;
services apply only the fields the client actually sent
(``model_dump(exclude_unset=True)``), so ``null`` can clear a nullable
field while an omitted field stays untouched.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

SLUG_PATTERN = r"^[-a-zA-Z0-9_]+$"


def _check_image_url(value: Optional[str]) -> Optional[str]:
    if value and not value.startswith(("http://", "https://", "data:")):
        raise ValueError("Must be a valid URL or data URL")
    return value


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------


class CreateCategoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    parent_id: Optional[UUID] = None
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(min_length=1, max_length=100, pattern=SLUG_PATTERN)
    description: str = Field(default="", max_length=500)
    image_url: str = ""
    display_order: int = Field(default=0, ge=0)
    is_active: bool = True

    @field_validator("image_url")
    @classmethod
    def image_url_must_be_url(cls, v: str) -> str:
        return _check_image_url(v)


class UpdateCategoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    parent_id: Optional[UUID] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    slug: Optional[str] = Field(
        default=None, min_length=1, max_length=100, pattern=SLUG_PATTERN
    )
    description: Optional[str] = Field(default=None, max_length=500)
    image_url: Optional[str] = None
    display_order: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None

    @field_validator("image_url")
    @classmethod
    def image_url_must_be_url(cls, v: Optional[str]) -> Optional[str]:
        return _check_image_url(v)


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Validates:
    - ``sku`` is non-empty (stored upper-cased).
    - ``base_price`` and ``sale_price`` are greater than zero.
    - ``stock_quantity`` is non-negative.
    """

    model_config = ConfigDict(frozen=True)

    sku: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=200)
    slug: str = Field(min_length=1, max_length=200, pattern=SLUG_PATTERN)
    short_description: str = Field(min_length=1, max_length=500)
    long_description: str = ""
    base_price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    sale_price: Optional[Decimal] = Field(
        default=None, gt=0, max_digits=10, decimal_places=2
    )
    category_id: Optional[UUID] = None
    brand: str = Field(default="", max_length=100)
    stock_quantity: int = Field(default=0, ge=0)
    is_featured: bool = False
    is_active: bool = True

    @field_validator("sku")
    @classmethod
    def sku_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("SKU must not be empty.")
        return v.strip().upper()


class UpdateProductDTO(BaseModel):
    """All fields are optional; only supplied fields are updated."""

    model_config = ConfigDict(frozen=True)

    sku: Optional[str] = Field(default=None, min_length=1, max_length=50)
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(
        default=None, min_length=1, max_length=200, pattern=SLUG_PATTERN
    )
    short_description: Optional[str] = Field(default=None, min_length=1, max_length=500)
    long_description: Optional[str] = None
    base_price: Optional[Decimal] = Field(
        default=None, gt=0, max_digits=10, decimal_places=2
    )
    sale_price: Optional[Decimal] = Field(
        default=None, gt=0, max_digits=10, decimal_places=2
    )
    category_id: Optional[UUID] = None
    brand: Optional[str] = Field(default=None, max_length=100)
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None

    @field_validator("sku")
    @classmethod
    def sku_upper(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v is not None else v
