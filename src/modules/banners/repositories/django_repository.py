from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.banners.models import Banner
from modules.banners.repositories.interfaces import IBannerRepository

logger = structlog.get_logger(__name__)


class BannerDjangoRepository(IBannerRepository):
    def get_by_id(self, id: str) -> Optional[Banner]:
        try:
            return Banner.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Banner.objects.order_by("display_order", "-created_at", "-id")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Banner) -> Banner:
        entity.save()
        logger.info("banner.saved", banner_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        deleted, _ = Banner.objects.filter(id=id).delete()
        return deleted > 0
