"""
Tip personalisation and voice navigation.
"""

from __future__ import annotations

import logging
from datetime import date

from babies import repository as babies_repository
from core.db import Database
from core.errors import NotFoundError, ValidationError

from . import repository, schemas

logger = logging.getLogger(__name__)

# Below this many personalised tips the full catalogue is shown instead.
MIN_PERSONAL_TIPS = 3

VOICE_COMMANDS = frozenset(
    {
        "profile",
        "sign out",
        "feeding schedule",
        "settings",
        "dashboard",
        "milestones",
        "journal",
        "reminders",
        "growth",
        "forum",
    }
)


def age_in_months(birthdate: date, today: date) -> int:
    """
    Whole months between `birthdate` and `today`; a month only counts once
    its day-of-month has been reached.
    """
    months = (today.year - birthdate.year) * 12 + (today.month - birthdate.month)
    if today.day < birthdate.day:
        months -= 1
    return months


def _as_date(value: object) -> date | None:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


async def notification_tips(db: Database, user_id: int, *, today: date | None = None) -> dict:
    today = today or date.today()
    babies = await babies_repository.list_user_babies(db, user_id)
    if not babies:
        raise NotFoundError("No baby profiles found for this user")

    settings = await repository.get_notification_settings(db, user_id)
    if settings is None:
        settings = await repository.create_notification_settings(db, user_id=user_id)
        logger.info("tip_settings_created user_id=%s", user_id)

    tips: list[dict] = []
    for baby in babies:
        birthdate = _as_date(baby.get("birthdate"))
        if birthdate is None:
            continue
        tips.extend(
            await repository.tips_for(
                db,
                age_months=age_in_months(birthdate, today),
                gender=baby.get("gender"),
            )
        )

    if len(tips) < MIN_PERSONAL_TIPS:
        logger.info("tips_fallback_to_all user_id=%s matched=%s", user_id, len(tips))
        tips = await repository.list_tips(db)

    return {"notificationSettings": settings, "babiesTips": tips}


def check_notification_settings(payload: schemas.NotificationSettingsRequest) -> None:
    if not payload.notification_frequency:
        raise ValidationError("notification_frequency is required")
    if payload.opt_in is None:
        raise ValidationError("opt_in is required")


async def save_notification_settings(
    db: Database,
    user_id: int,
    payload: schemas.NotificationSettingsRequest,
) -> dict:
    row = await repository.update_notification_settings(
        db,
        user_id=user_id,
        notification_frequency=payload.notification_frequency,
        opt_in=payload.opt_in,
    )
    if row is None:
        row = await repository.create_notification_settings(
            db,
            user_id=user_id,
            notification_frequency=payload.notification_frequency,
            opt_in=payload.opt_in,
        )
    return row


def voice_command(text: str | None) -> str:
    command = (text or "").strip().lower()
    if command not in VOICE_COMMANDS:
        raise NotFoundError("Voice command not found")
    return command
