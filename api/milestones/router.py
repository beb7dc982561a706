"""
Milestone API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from auth.dependencies import BabyAccess, get_current_user_id, owned_baby
from core import envelope
from core.db import Database, get_db
from core.errors import NotFoundError, ValidationError
from core.params import path_id

from . import repository, schemas

logger = logging.getLogger(__name__)

router = APIRouter()

baby_id_param = path_id("baby_id", "baby ID")
baby_access = owned_baby("baby_id", "baby ID", "Access denied: Baby does not belong to current user")


async def new_milestone(request: schemas.MilestoneRequest) -> schemas.MilestoneRequest:
    if not (request.title or "").strip():
        raise ValidationError("Missing required parameters: title")
    return request


@router.get("/milestones")
async def list_user_milestones(
    today: str | None = Query(default=None),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    rows = await repository.list_user_milestones(db, user_id, today_only=today == "true")
    return envelope.ok(data=rows)


@router.get("/baby/{baby_id}/milestones")
async def list_baby_milestones(
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    rows = await repository.list_baby_milestones(db, access.baby_id)
    if not rows:
        raise NotFoundError("No milestones found for this baby")
    return envelope.ok(data=rows)


@router.post("/baby/{baby_id}/milestones", status_code=201)
async def create_milestone(
    baby_id: int = Depends(baby_id_param),
    request: schemas.MilestoneRequest = Depends(new_milestone),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    row = await repository.create_milestone(
        db,
        baby_id=access.baby_id,
        milestone_date=request.date,
        title=request.title.strip(),
        details=request.details,
    )
    logger.info("milestone_created baby_id=%s milestone_id=%s", access.baby_id, row["milestone_id"])
    return envelope.ok(data=row)


@router.put("/baby/{baby_id}/milestones/{milestone_id}")
async def update_milestone(
    request: schemas.MilestoneRequest,
    baby_id: int = Depends(baby_id_param),
    milestone_id: int = Depends(path_id("milestone_id", "milestone ID")),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    row = await repository.update_milestone(
        db,
        milestone_id=milestone_id,
        baby_id=access.baby_id,
        milestone_date=request.date,
        title=request.title,
        details=request.details,
    )
    if row is None:
        raise NotFoundError("Milestone record not found")
    return envelope.ok(data=row)


@router.delete("/baby/{baby_id}/milestones/{milestone_id}")
async def delete_milestone(
    baby_id: int = Depends(baby_id_param),
    milestone_id: int = Depends(path_id("milestone_id", "milestone ID")),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    if not await repository.delete_milestone(db, milestone_id=milestone_id, baby_id=access.baby_id):
        raise NotFoundError("Milestone record not found")
    logger.info("milestone_deleted baby_id=%s milestone_id=%s", access.baby_id, milestone_id)
    return envelope.ok(message="Milestone deleted successfully")
