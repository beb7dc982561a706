"""
Childcare service API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header

from auth import service as auth_service
from auth.dependencies import get_current_user_id
from core import envelope
from core.db import Database, get_childcare_db, get_db
from core.errors import NotFoundError, ValidationError
from core.params import is_valid_id

from . import repository, schemas

logger = logging.getLogger(__name__)

router = APIRouter()


async def favorite_change(request: schemas.FavoriteRequest) -> tuple[int, bool]:
    if not is_valid_id(request.provider_id):
        raise ValidationError("Provider ID is required")
    return int(str(request.provider_id).strip()), request.is_favorite


@router.get("/careServices")
async def list_providers(
    user_id: int = Depends(get_current_user_id),
    childcare_db: Database = Depends(get_childcare_db),
) -> dict:
    return envelope.ok(providers=await repository.list_providers(childcare_db))


@router.get("/careServices/favorites")
async def list_favorites(
    authorization: str | None = Header(default=None),
    db: Database = Depends(get_db),
) -> dict:
    # Anonymous or unknown callers simply have no favorites.
    user_id = await auth_service.resolve_user_id(db, authorization)
    if user_id is None:
        return envelope.ok(favorites=[])
    return envelope.ok(favorites=await repository.list_favorite_ids(db, user_id))


@router.post("/careServices/favorites")
async def toggle_favorite(
    change: tuple[int, bool] = Depends(favorite_change),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
    childcare_db: Database = Depends(get_childcare_db),
) -> dict:
    provider_id, is_favorite = change

    if not await repository.provider_exists(childcare_db, provider_id):
        raise NotFoundError("Provider not found")

    async with db.transaction() as conn:
        await repository.ensure_provider_reference(conn, provider_id)
        if is_favorite:
            await repository.add_favorite(conn, user_id=user_id, provider_id=provider_id)
        else:
            await repository.remove_favorite(conn, user_id=user_id, provider_id=provider_id)

    logger.info(
        "favorite_toggled user_id=%s provider_id=%s favorite=%s",
        user_id,
        provider_id,
        is_favorite,
    )
    message = "Provider added to favorites" if is_favorite else "Provider removed from favorites"
    return envelope.ok(message=message)
