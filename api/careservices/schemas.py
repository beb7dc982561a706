"""
Childcare favorites request models.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FavoriteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider_id: int | str | None = Field(default=None, alias="providerId")
    is_favorite: bool = Field(default=False, alias="isFavorite")
