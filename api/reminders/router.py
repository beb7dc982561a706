"""
Reminder API endpoints (baby-scoped).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth.dependencies import BabyAccess, owned_baby
from core import envelope
from core.db import Database, get_db
from core.params import path_id

from . import schemas, service

router = APIRouter()

baby_id_param = path_id("babyId", "babyId")
baby_access = owned_baby("babyId", "babyId", "Access denied: Baby does not belong to current user")


# Body checks are dependencies declared ahead of `baby_access`, so a bad body is
# rejected before the caller is looked up.
async def new_reminder(request: schemas.ReminderRequest) -> schemas.ReminderRequest:
    service.check_new_reminder(request)
    return request


async def reminder_ids(request: schemas.DeleteRemindersRequest) -> list[int]:
    return service.ids_to_delete(request)


@router.get("/baby/{babyId}/reminders")
async def list_reminders(
    upcoming: str | None = Query(default=None),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    only_upcoming = (upcoming or "").strip().lower() not in ("", "false", "0")
    rows = await service.list_reminders(db, access.baby_id, upcoming=only_upcoming)
    # Empty is a valid result here, not a 404.
    return envelope.ok(data=rows)


@router.post("/baby/{babyId}/reminders", status_code=201)
async def create_reminder(
    baby_id: int = Depends(baby_id_param),
    request: schemas.ReminderRequest = Depends(new_reminder),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    row = await service.create_reminder(db, access.baby_id, request)
    return envelope.ok(data=row)


@router.put("/baby/{babyId}/reminders/{reminderId}")
async def update_reminder(
    request: schemas.ReminderRequest,
    baby_id: int = Depends(baby_id_param),
    reminder_id: int = Depends(path_id("reminderId", "reminderId")),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    row = await service.update_reminder(db, access.baby_id, reminder_id, request)
    return envelope.ok(data=row)


@router.delete("/baby/{babyId}/reminders")
async def delete_reminders(
    baby_id: int = Depends(baby_id_param),
    ids: list[int] = Depends(reminder_ids),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    result = await service.delete_reminders(db, access.baby_id, ids)
    return envelope.ok(**result)
