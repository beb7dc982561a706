"""
Journal request models.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class UpdateJournalEntryRequest(BaseModel):
    title: str | None = None
    text: str | None = None
    # Validated by hand so the error text matches the journal client.
    tags: Any = None
