"""
User profile request models.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class UpdateUserRequest(BaseModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, min_length=3, max_length=320)
    role: str | None = Field(default=None, max_length=50)
    created_at: datetime | None = None
