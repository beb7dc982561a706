"""
Feeding schedule request models.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field


class FeedingScheduleRequest(BaseModel):
    meal: str | None = Field(default=None, max_length=100)
    time: dt.time | None = None
    type: str | None = Field(default=None, max_length=100)
    amount: Decimal | None = Field(default=None, ge=0)
    issues: str | None = Field(default=None, max_length=2000)
    notes: str | None = Field(default=None, max_length=2000)
    date: dt.date | None = None
