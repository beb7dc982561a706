"""
Lookup request models.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class NotificationSettingsRequest(BaseModel):
    notification_frequency: str | None = Field(default=None, max_length=50)
    opt_in: bool | None = None


class VoiceCommandRequest(BaseModel):
    text: str | None = Field(default=None, max_length=200)
