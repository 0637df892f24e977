"""Notification DTOs (Pydantic v2, immutable)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from modules.notifications.constants import Segment


class SendNotificationDTO(BaseModel):
    """``user_ids`` takes precedence over ``segment``; with neither the
    notification goes to every device."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1, max_length=100)
    body: str = Field(min_length=1, max_length=500)
    user_ids: Optional[List[str]] = None
    segment: Optional[Segment] = None
    data: Dict[str, Any] = Field(default_factory=dict)
