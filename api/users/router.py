"""
User profile API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth.dependencies import get_current_user_id, path_self
from core import envelope
from core.db import Database, get_db
from core.errors import NotFoundError

from . import repository, schemas, service

router = APIRouter()

self_only = path_self("id", "user ID", "Not authorized to modify this user")


@router.get("/user")
async def get_user(
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    row = await repository.get_user(db, user_id)
    if row is None:
        raise NotFoundError("User profile not found")
    return envelope.ok(data=row)


@router.put("/user/{id}")
async def update_user(
    request: schemas.UpdateUserRequest,
    user_id: int = Depends(self_only),
    db: Database = Depends(get_db),
) -> dict:
    row = await service.update_user(db, user_id, request)
    return envelope.ok(data=row)


@router.delete("/user/{id}")
async def delete_user(
    user_id: int = Depends(self_only),
    db: Database = Depends(get_db),
) -> dict:
    await service.delete_user(db, user_id)
    return envelope.ok(message="User and related entries deleted successfully")
