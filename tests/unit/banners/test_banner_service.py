from __future__ import annotations

from datetime import datetime, timezone as dt_timezone

import pytest
from pydantic import ValidationError

from modules.banners.constants import BannerType, LinkType
from modules.banners.dtos import CreateBannerDTO, UpdateBannerDTO
from modules.banners.exceptions import BannerNotFound, InvalidBannerWindow
from modules.banners.models import Banner
from modules.banners.repositories.django_repository import BannerDjangoRepository
from modules.banners.services import BannerService

pytestmark = pytest.mark.unit

MAY_1 = datetime(2026, 5, 1, tzinfo=dt_timezone.utc)
MAY_31 = datetime(2026, 5, 31, tzinfo=dt_timezone.utc)
APRIL_1 = datetime(2026, 4, 1, tzinfo=dt_timezone.utc)


@pytest.fixture()
def service():
    return BannerService(repository=BannerDjangoRepository())


@pytest.fixture()
def banner(service):
    return service.create_banner(
        CreateBannerDTO(
            title="Spring sale",
            image_url="https://cdn.example.com/spring.png",
            link_type=LinkType.CATEGORY,
            link_value="electronics",
            banner_type=BannerType.HERO,
            starts_at=MAY_1,
            ends_at=MAY_31,
        )
    )


class TestBannerService:
    def test_create_stores_url_as_text(self, banner):
        banner.refresh_from_db()
        assert banner.image_url == "https://cdn.example.com/spring.png"

    def test_create_rejects_inverted_window(self):
        with pytest.raises(ValidationError):
            CreateBannerDTO(
                title="Broken",
                image_url="https://cdn.example.com/x.png",
                link_type=LinkType.NONE,
                banner_type=BannerType.PROMOTIONAL,
                starts_at=MAY_31,
                ends_at=MAY_1,
            )

    def test_create_rejects_bad_url(self):
        with pytest.raises(ValidationError):
            CreateBannerDTO(
                title="Broken",
                image_url="not a url",
                link_type=LinkType.NONE,
                banner_type=BannerType.PROMOTIONAL,
            )

    def test_update_rejects_merged_inverted_window(self, service, banner):
        with pytest.raises(InvalidBannerWindow):
            service.update_banner(
                str(banner.id), UpdateBannerDTO(ends_at=APRIL_1)
            )

    def test_update_can_clear_window(self, service, banner):
        updated = service.update_banner(
            str(banner.id), UpdateBannerDTO(starts_at=None, ends_at=None)
        )
        assert updated.starts_at is None
        assert updated.ends_at is None

    def test_update_ignores_null_title(self, service, banner):
        updated = service.update_banner(str(banner.id), UpdateBannerDTO(title=None))
        assert updated.title == "Spring sale"

    def test_delete(self, service, banner):
        service.delete_banner(str(banner.id))
        assert not Banner.objects.filter(id=banner.id).exists()

    def test_delete_unknown(self, service):
        with pytest.raises(BannerNotFound):
            service.delete_banner("not-a-uuid")
