"""
Forum request models.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

CATEGORIES = ("general", "help", "feedback", "other")


class PostRequest(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    content: str | None = Field(default=None, max_length=20000)
    category: str | None = None


class ReplyRequest(BaseModel):
    content: str | None = Field(default=None, max_length=10000)
