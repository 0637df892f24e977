from django.db import models


class LinkType(models.TextChoices):
    PRODUCT = "product", "Product"
    CATEGORY = "category", "Category"
    EXTERNAL = "external", "External"
    NONE = "none", "None"


class BannerType(models.TextChoices):
    HERO = "hero", "Hero"
    CATEGORY = "category", "Category"
    PROMOTIONAL = "promotional", "Promotional"
    FLASH_SALE = "flash_sale", "Flash sale"
