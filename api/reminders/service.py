"""
Reminder business logic.
"""

from __future__ import annotations

import logging
import re

from core.db import Database
from core.errors import NotFoundError, ValidationError
from core.params import is_valid_id

from . import repository, schemas

logger = logging.getLogger(__name__)

_AM_PM_SUFFIX = re.compile(r"\s(AM|PM)$", re.IGNORECASE)


def format_time(time: str, am_pm: str | None) -> str:
    """
    Append the AM/PM marker unless the time already carries one.
    """
    time = time.strip()
    if _AM_PM_SUFFIX.search(time) or not (am_pm or "").strip():
        return time
    return f"{time} {am_pm.strip().upper()}"


def _reminder_in(value: int | str | None) -> str | None:
    return None if value is None else str(value)


async def list_reminders(db: Database, baby_id: int, *, upcoming: bool) -> list[dict]:
    if upcoming:
        return await repository.list_upcoming_reminders(db, baby_id)
    return await repository.list_reminders(db, baby_id)


def check_new_reminder(payload: schemas.ReminderRequest) -> None:
    if not payload.title or not payload.time or payload.date is None:
        raise ValidationError("Missing required reminder data (title, time, date)")


async def create_reminder(db: Database, baby_id: int, payload: schemas.ReminderRequest) -> dict:
    row = await repository.create_reminder(
        db,
        baby_id=baby_id,
        title=payload.title,
        time=format_time(payload.time, payload.am_pm),
        reminder_date=payload.date,
        notes=payload.notes,
        is_active=True if payload.is_active is None else payload.is_active,
        next_reminder=False if payload.next_reminder is None else payload.next_reminder,
        reminder_in=_reminder_in(payload.reminder_in),
    )
    logger.info("reminder_created baby_id=%s reminder_id=%s", baby_id, row["reminder_id"])
    return row


async def update_reminder(
    db: Database,
    baby_id: int,
    reminder_id: int,
    payload: schemas.ReminderRequest,
) -> dict:
    time = format_time(payload.time, payload.am_pm) if payload.time else None
    row = await repository.update_reminder(
        db,
        reminder_id=reminder_id,
        baby_id=baby_id,
        title=payload.title,
        time=time,
        reminder_date=payload.date,
        notes=payload.notes,
        is_active=payload.is_active,
        next_reminder=payload.next_reminder,
        reminder_in=_reminder_in(payload.reminder_in),
    )
    if row is None:
        raise NotFoundError("Reminder not found")
    return row


def ids_to_delete(payload: schemas.DeleteRemindersRequest) -> list[int]:
    if payload.reminder_id not in (None, ""):
        raw_ids = [payload.reminder_id]
    elif payload.reminder_ids is not None:
        raw_ids = list(payload.reminder_ids)
    else:
        raise ValidationError("Please provide either reminderId or reminderIds array")

    if not raw_ids:
        raise ValidationError("No reminder IDs provided for deletion")
    if not all(is_valid_id(raw) for raw in raw_ids):
        raise ValidationError("One or more invalid reminder ID formats")
    return [int(str(raw).strip()) for raw in raw_ids]


async def delete_reminders(db: Database, baby_id: int, reminder_ids: list[int]) -> dict:
    deleted_ids = await repository.delete_reminders(db, reminder_ids=reminder_ids, baby_id=baby_id)
    if not deleted_ids:
        raise NotFoundError("No matching reminders found")

    if len(deleted_ids) == 1:
        message = "Reminder deleted successfully"
    else:
        message = f"{len(deleted_ids)} reminders deleted successfully"
    logger.info("reminders_deleted baby_id=%s reminder_ids=%s", baby_id, deleted_ids)
    return {"message": message, "deletedIds": deleted_ids}
