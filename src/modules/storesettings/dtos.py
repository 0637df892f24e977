from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from modules.storesettings.models import DEFAULT_GROUP


class StoreSettingDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1, max_length=100)
    value: str
    group: str = Field(default=DEFAULT_GROUP, min_length=1, max_length=50)


# PUT /settings takes a bare JSON array
StoreSettingListAdapter = TypeAdapter(List[StoreSettingDTO])
