"""
Stool log request models.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class StoolEntryRequest(BaseModel):
    # All optional at the model level: POST enforces color/consistency with a
    # domain message, PUT is a partial update.
    color: str | None = Field(default=None, max_length=50)
    consistency: str | None = Field(default=None, max_length=50)
    notes: str | None = Field(default=None, max_length=2000)
    timestamp: datetime | None = None
