"""Banner DTOs (Pydantic v2, immutable)."""

from __future__ import annotations

from typing import Optional

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    model_validator,
)

from modules.banners.constants import BannerType, LinkType


class CreateBannerDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1, max_length=100)
    image_url: HttpUrl
    link_type: LinkType
    link_value: str = Field(default="", max_length=500)
    banner_type: BannerType
    display_order: int = Field(default=0, ge=0)
    starts_at: Optional[AwareDatetime] = None
    ends_at: Optional[AwareDatetime] = None
    is_active: bool = True

    @model_validator(mode="after")
    def window_must_be_ordered(self):
        if self.starts_at and self.ends_at and self.ends_at < self.starts_at:
            raise ValueError("ends_at must not precede starts_at.")
        return self


class UpdateBannerDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    image_url: Optional[HttpUrl] = None
    link_type: Optional[LinkType] = None
    link_value: Optional[str] = Field(default=None, max_length=500)
    banner_type: Optional[BannerType] = None
    display_order: Optional[int] = Field(default=None, ge=0)
    starts_at: Optional[AwareDatetime] = None
    ends_at: Optional[AwareDatetime] = None
    is_active: Optional[bool] = None
