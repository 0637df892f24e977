from __future__ import annotations

from django.db import models

from modules.banners.constants import BannerType, LinkType
from modules.core.models import BaseModel


class Banner(BaseModel):
    """Storefront banner.

    ``link_value`` is a product id, category id or URL depending on
    ``link_type``.  A banner without ``starts_at``/``ends_at`` is shown
    for as long as it is active.
    """

    title = models.CharField(max_length=100)
    image_url = models.TextField()
    link_type = models.CharField(max_length=20, choices=LinkType.choices)
    link_value = models.CharField(max_length=500, blank=True, default="")
    banner_type = models.CharField(max_length=20, choices=BannerType.choices)
    display_order = models.PositiveIntegerField(default=0)
    starts_at = models.DateTimeField(null=True, blank=True)
    ends_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "banners"
        ordering = ["display_order", "-created_at"]

    def __str__(self) -> str:
        return self.title
