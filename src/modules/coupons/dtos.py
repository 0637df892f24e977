"""Coupon DTOs (Pydantic v2, immutable).

- ``CreateCouponDTO`` / ``UpdateCouponDTO``: admin create and edit.
- ``ValidateCouponDTO``: discount preview request.
- ``CouponQuote``: outcome of a successful validation.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Optional
from uuid import UUID

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from modules.coupons.constants import MAX_PERCENTAGE, DiscountType


def _upper_code(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip().upper()
    if not value:
        raise ValueError("Code must not be empty.")
    return value


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateCouponDTO(BaseModel):
    """Validates:
    - ``code`` is non-empty (stored upper-cased).
    - ``ends_at`` is after ``starts_at``.
    - a percentage discount does not exceed 100.
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(min_length=1, max_length=50)
    description: str = Field(default="", max_length=200)
    discount_type: DiscountType
    discount_value: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    minimum_purchase: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=10, decimal_places=2
    )
    maximum_discount: Optional[Decimal] = Field(
        default=None, gt=0, max_digits=10, decimal_places=2
    )
    usage_limit: Optional[int] = Field(default=None, gt=0)
    user_usage_limit: int = Field(default=1, gt=0)
    applicable_products: List[str] = Field(default_factory=list)
    applicable_categories: List[str] = Field(default_factory=list)
    starts_at: AwareDatetime
    ends_at: AwareDatetime
    is_active: bool = True

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        return _upper_code(v)

    @model_validator(mode="after")
    def check_consistency(self):
        if self.ends_at <= self.starts_at:
            raise ValueError("ends_at must be after starts_at.")
        if (
            self.discount_type == DiscountType.PERCENTAGE
            and self.discount_value > MAX_PERCENTAGE
        ):
            raise ValueError("Percentage discount cannot exceed 100.")
        return self


class UpdateCouponDTO(BaseModel):
    """All fields optional; cross-field rules are checked by the service
    against the merged coupon."""

    model_config = ConfigDict(frozen=True)

    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[Decimal] = Field(
        default=None, gt=0, max_digits=10, decimal_places=2
    )
    minimum_purchase: Optional[Decimal] = Field(
        default=None, ge=0, max_digits=10, decimal_places=2
    )
    maximum_discount: Optional[Decimal] = Field(
        default=None, gt=0, max_digits=10, decimal_places=2
    )
    usage_limit: Optional[int] = Field(default=None, gt=0)
    user_usage_limit: Optional[int] = Field(default=None, gt=0)
    applicable_products: Optional[List[str]] = None
    applicable_categories: Optional[List[str]] = None
    starts_at: Optional[AwareDatetime] = None
    ends_at: Optional[AwareDatetime] = None
    is_active: Optional[bool] = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: Optional[str]) -> Optional[str]:
        return _upper_code(v)


class ValidateCouponDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str = Field(min_length=1, max_length=50)
    order_amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    user_id: Optional[UUID] = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        return _upper_code(v)


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class CouponQuote(BaseModel):
    """A coupon that may be applied, with the discount it yields."""

    model_config = ConfigDict(frozen=True)

    coupon: Any
    order_amount: Decimal
    discount: Decimal

    @property
    def final_amount(self) -> Decimal:
        return self.order_amount - self.discount

    def as_dict(self) -> dict:
        return {
            "coupon": {
                "id": str(self.coupon.id),
                "code": self.coupon.code,
                "discount_type": self.coupon.discount_type,
                "discount_value": str(self.coupon.discount_value),
            },
            "order_amount": str(self.order_amount),
            "discount": str(self.discount),
            "final_amount": str(self.final_amount),
        }
