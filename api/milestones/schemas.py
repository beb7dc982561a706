"""
Milestone request models.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field


class MilestoneRequest(BaseModel):
    date: dt.date | None = None
    title: str | None = Field(default=None, max_length=255)
    details: str | None = Field(default=None, max_length=5000)
