from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

PERIOD_DAYS = {"week": 7, "month": 30, "year": 365}


class SalesQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: Literal["week", "month", "year"] = "week"

    @property
    def days(self) -> int:
        return PERIOD_DAYS[self.period]
