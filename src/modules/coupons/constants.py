"""Coupon constants."""

from decimal import Decimal

from django.db import models


class DiscountType(models.TextChoices):
    PERCENTAGE = "percentage", "Percentage"
    FIXED = "fixed", "Fixed amount"


CENT = Decimal("0.01")
MAX_PERCENTAGE = Decimal("100")
