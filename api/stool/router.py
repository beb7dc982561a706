"""
Stool log API endpoints (baby-scoped).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from auth.dependencies import BabyAccess, owned_baby
from core import envelope
from core.db import Database, get_db
from core.errors import NotFoundError, ValidationError
from core.params import path_id

from . import repository, schemas

logger = logging.getLogger(__name__)

router = APIRouter()

baby_id_param = path_id("babyId", "babyId")
baby_access = owned_baby("babyId", "babyId", "Forbidden")


async def new_stool_entry(request: schemas.StoolEntryRequest) -> schemas.StoolEntryRequest:
    if not request.color or not request.consistency:
        raise ValidationError("Missing required stool data (color, consistency)")
    return request


@router.get("/baby/{babyId}/stool")
async def list_stool_entries(
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    rows = await repository.list_stool_entries(db, access.baby_id)
    if not rows:
        raise NotFoundError("No stool records found")
    return envelope.ok(data=rows)


@router.post("/baby/{babyId}/stool", status_code=201)
async def create_stool_entry(
    baby_id: int = Depends(baby_id_param),
    request: schemas.StoolEntryRequest = Depends(new_stool_entry),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    row = await repository.create_stool_entry(
        db,
        baby_id=access.baby_id,
        color=request.color,
        consistency=request.consistency,
        notes=request.notes,
        timestamp=request.timestamp,
    )
    logger.info("stool_created baby_id=%s stool_id=%s", access.baby_id, row["stool_id"])
    return envelope.ok(data=row)


@router.put("/baby/{babyId}/stool/{stoolId}")
async def update_stool_entry(
    request: schemas.StoolEntryRequest,
    baby_id: int = Depends(baby_id_param),
    stool_id: int = Depends(path_id("stoolId", "stoolId")),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    row = await repository.update_stool_entry(
        db,
        stool_id=stool_id,
        baby_id=access.baby_id,
        color=request.color,
        consistency=request.consistency,
        notes=request.notes,
        timestamp=request.timestamp,
    )
    if row is None:
        raise NotFoundError("Stool entry not found")
    return envelope.ok(data=row)


@router.delete("/baby/{babyId}/stool/{stoolId}")
async def delete_stool_entry(
    baby_id: int = Depends(baby_id_param),
    stool_id: int = Depends(path_id("stoolId", "stoolId")),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    deleted = await repository.delete_stool_entry(db, stool_id=stool_id, baby_id=access.baby_id)
    if not deleted:
        raise NotFoundError("Stool entry not found")
    logger.info("stool_deleted baby_id=%s stool_id=%s", access.baby_id, stool_id)
    return envelope.ok(message="Stool entry deleted successfully")
