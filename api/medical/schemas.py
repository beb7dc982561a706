"""
Medical professional request models.
"""

from __future__ import annotations

from pydantic import BaseModel


class ConnectRequest(BaseModel):
    baby_id: int | str | None = None
