"""
Baby profile request models.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class BabyProfile(BaseModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    gender: str | None = Field(default=None, max_length=20)
    weight: Decimal | None = Field(default=None, ge=0)
    birthdate: date | None = None
    height: Decimal | None = Field(default=None, ge=0)


class UpdateBabyRequest(BaseModel):
    # Clients wrap the profile in a `data` object on update.
    data: BabyProfile | None = None
