"""
Growth record API endpoints (baby-scoped).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from auth.dependencies import BabyAccess, owned_baby
from core import envelope
from core.db import Database, get_db
from core.errors import NotFoundError
from core.params import path_id, require_fields

from . import repository, schemas

logger = logging.getLogger(__name__)

router = APIRouter()

baby_id_param = path_id("babyId", "baby ID")
baby_access = owned_baby("babyId", "baby ID", "Access denied: Baby does not belong to current user")


async def new_growth_record(request: schemas.GrowthRecordRequest) -> schemas.GrowthRecordRequest:
    require_fields(request.model_dump(), ["height", "weight"])
    return request


@router.get("/baby/{babyId}/growth")
async def list_growth_records(
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    rows = await repository.list_growth_records(db, access.baby_id)
    if not rows:
        raise NotFoundError(f"No growth records found for [babyId] {access.baby_id}")
    return envelope.ok(data=rows)


@router.post("/baby/{babyId}/growth", status_code=201)
async def create_growth_record(
    baby_id: int = Depends(baby_id_param),
    request: schemas.GrowthRecordRequest = Depends(new_growth_record),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    row = await repository.create_growth_record(
        db,
        baby_id=access.baby_id,
        record_date=request.date,
        height=request.height,
        weight=request.weight,
        notes=request.notes,
    )
    logger.info("growth_created baby_id=%s growth_id=%s", access.baby_id, row["growth_id"])
    return envelope.ok(data=row)


@router.put("/baby/{babyId}/growth/{growthId}")
async def update_growth_record(
    request: schemas.GrowthRecordRequest,
    baby_id: int = Depends(baby_id_param),
    growth_id: int = Depends(path_id("growthId", "growth ID")),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    row = await repository.update_growth_record(
        db,
        growth_id=growth_id,
        baby_id=access.baby_id,
        record_date=request.date,
        height=request.height,
        weight=request.weight,
        notes=request.notes,
    )
    if row is None:
        raise NotFoundError("Growth record not found")
    return envelope.ok(data=row)


@router.delete("/baby/{babyId}/growth/{growthId}")
async def delete_growth_record(
    baby_id: int = Depends(baby_id_param),
    growth_id: int = Depends(path_id("growthId", "growth ID")),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    if not await repository.delete_growth_record(db, growth_id=growth_id, baby_id=access.baby_id):
        raise NotFoundError("Growth record not found")
    logger.info("growth_deleted baby_id=%s growth_id=%s", access.baby_id, growth_id)
    return envelope.ok(message="Growth record deleted successfully")
