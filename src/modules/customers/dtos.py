from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UpdateCustomerStatusDTO(BaseModel):
    """Body of ``PUT /admin/users/{id}/status``."""

    model_config = ConfigDict(frozen=True)

    is_active: bool
