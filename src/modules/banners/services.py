from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.banners.exceptions import BannerNotFound, InvalidBannerWindow
from modules.banners.models import Banner

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.banners.dtos import CreateBannerDTO, UpdateBannerDTO
    from modules.banners.repositories.interfaces import IBannerRepository

logger = structlog.get_logger(__name__)


def _dump(dto) -> Dict[str, Any]:
    data = dto.model_dump(exclude_unset=True)
    if data.get("image_url") is not None:
        data["image_url"] = str(data["image_url"])
    if data.get("link_value") is None:
        data.pop("link_value", None)
    return data


class BannerService:
    def __init__(self, repository: IBannerRepository) -> None:
        self._repo = repository

    @transaction.atomic
    def create_banner(self, dto: CreateBannerDTO) -> Banner:
        banner = self._repo.save(Banner(**_dump(dto)))
        logger.info("banner.created", banner_id=str(banner.id), banner_type=banner.banner_type)
        return banner

    @transaction.atomic
    def update_banner(self, id: str, dto: UpdateBannerDTO) -> Banner:
        """``starts_at``/``ends_at`` may be cleared with ``null``; other
        fields ignore ``null``.

        Raises:
            BannerNotFound: the banner does not exist.
            InvalidBannerWindow: the merged window is inverted.
        """
        banner = self.get_banner(id)
        changes = _dump(dto)
        for field, value in changes.items():
            if value is None and field not in {"starts_at", "ends_at"}:
                continue
            setattr(banner, field, value)
        if banner.starts_at and banner.ends_at and banner.ends_at < banner.starts_at:
            raise InvalidBannerWindow("ends_at must not precede starts_at")
        banner = self._repo.save(banner)
        logger.info("banner.updated", banner_id=str(id), fields=sorted(changes))
        return banner

    @transaction.atomic
    def delete_banner(self, id: str) -> None:
        banner = self.get_banner(id)
        self._repo.delete(str(banner.id))
        logger.info("banner.deleted", banner_id=str(id))

    def list_banners(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet:
        return self._repo.list(filters)

    def get_banner(self, id: str) -> Banner:
        banner = self._repo.get_by_id(id)
        if banner is None:
            raise BannerNotFound(f"Banner {id} not found.")
        return banner
