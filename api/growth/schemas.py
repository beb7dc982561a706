"""
Growth record request models.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field


class GrowthRecordRequest(BaseModel):
    date: dt.date | None = None
    height: Decimal | None = Field(default=None, ge=0)
    weight: Decimal | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=2000)
