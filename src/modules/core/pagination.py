"""Offset pagination producing the list envelope.

``?page=`` (>= 1, default 1) and ``?limit=`` (1..``MAX_PAGE_SIZE``,
default ``DEFAULT_PAGE_SIZE``) are validated with Pydantic; bad values
surface as ``VALIDATION_ERROR`` through the global exception handler.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List

from django.conf import settings
from pydantic import BaseModel, ConfigDict, Field, field_validator
from rest_framework.pagination import BasePagination

from modules.core.responses import success_with_meta


class PaginationQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE, ge=1)

    @field_validator("limit")
    @classmethod
    def cap_limit(cls, value: int) -> int:
        if value > settings.MAX_PAGE_SIZE:
            raise ValueError(f"limit must be at most {settings.MAX_PAGE_SIZE}")
        return value


class OffsetPagination(BasePagination):
    """Slices a queryset by ``page``/``limit`` and reports totals in ``meta``."""

    def paginate_queryset(self, queryset, request, view=None) -> List[Any]:
        params: Dict[str, Any] = {}
        for name in ("page", "limit"):
            value = request.query_params.get(name)
            if value not in (None, ""):
                params[name] = value
        self.query = PaginationQuery.model_validate(params)

        self.total = queryset.count()
        offset = (self.query.page - 1) * self.query.limit
        return list(queryset[offset : offset + self.query.limit])

    def get_meta(self) -> Dict[str, int]:
        return {
            "page": self.query.page,
            "limit": self.query.limit,
            "total": self.total,
            "total_pages": math.ceil(self.total / self.query.limit) if self.total else 0,
        }

    def get_paginated_response(self, data):
        return success_with_meta(data, self.get_meta())

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "success": {"type": "boolean", "example": True},
                "data": schema,
                "meta": {
                    "type": "object",
                    "properties": {
                        "page": {"type": "integer"},
                        "limit": {"type": "integer"},
                        "total": {"type": "integer"},
                        "total_pages": {"type": "integer"},
                    },
                },
            },
        }
