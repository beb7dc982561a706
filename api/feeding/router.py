"""
Feeding schedule API endpoints (baby-scoped).
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

_REQUIRED = ["meal", "time", "type", "amount"]


async def new_feeding_schedule(
    request: schemas.FeedingScheduleRequest,
) -> schemas.FeedingScheduleRequest:
    require_fields(request.model_dump(), _REQUIRED)
    return request


@router.get("/baby/{babyId}/getFeedingSchedules")
async def list_feeding_schedules(
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    rows = await repository.list_feeding_schedules(db, access.baby_id)
    if not rows:
        raise NotFoundError("No feeding schedules found")
    return envelope.ok(data=rows)


@router.get("/baby/{babyId}/getLatestFeed")
async def get_latest_feed(
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    row = await repository.get_latest_feed(db, access.baby_id)
    return envelope.ok(data=row)


@router.post("/baby/{babyId}/addFeedingSchedule", status_code=201)
async def create_feeding_schedule(
    baby_id: int = Depends(baby_id_param),
    request: schemas.FeedingScheduleRequest = Depends(new_feeding_schedule),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    row = await repository.create_feeding_schedule(
        db,
        baby_id=access.baby_id,
        meal=request.meal,
        feed_time=request.time,
        feed_type=request.type,
        amount=request.amount,
        issues=request.issues,
        notes=request.notes,
        feed_date=request.date,
    )
    logger.info(
        "feeding_created baby_id=%s feeding_schedule_id=%s",
        access.baby_id,
        row["feeding_schedule_id"],
    )
    return envelope.ok(data=row)


@router.put("/baby/{babyId}/updateFeedingSchedule/{mealId}")
async def update_feeding_schedule(
    request: schemas.FeedingScheduleRequest,
    baby_id: int = Depends(baby_id_param),
    meal_id: int = Depends(path_id("mealId", "meal ID")),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    row = await repository.update_feeding_schedule(
        db,
        feeding_schedule_id=meal_id,
        baby_id=access.baby_id,
        meal=request.meal,
        feed_time=request.time,
        feed_type=request.type,
        amount=request.amount,
        issues=request.issues,
        notes=request.notes,
        feed_date=request.date,
    )
    if row is None:
        raise NotFoundError("Feeding schedule not found")
    return envelope.ok(data=row)


@router.delete("/baby/{babyId}/deleteFeedingSchedule/{mealId}")
async def delete_feeding_schedule(
    baby_id: int = Depends(baby_id_param),
    meal_id: int = Depends(path_id("mealId", "meal ID")),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    deleted = await repository.delete_feeding_schedule(
        db, feeding_schedule_id=meal_id, baby_id=access.baby_id
    )
    if not deleted:
        raise NotFoundError("Feeding schedule not found")
    logger.info("feeding_deleted baby_id=%s feeding_schedule_id=%s", access.baby_id, meal_id)
    return envelope.ok(message="Feeding schedule deleted successfully")
