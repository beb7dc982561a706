"""
Lookup API endpoints: coupons, quizzes, curated tips and voice navigation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth.dependencies import require_user
from core import envelope
from core.db import Database, get_db
from core.errors import AuthenticationError, NotFoundError

from . import repository, schemas, service

router = APIRouter()

tips_user_id = require_user(missing_user=AuthenticationError, missing_user_message="Invalid user ID")


async def settings_change(
    request: schemas.NotificationSettingsRequest,
) -> schemas.NotificationSettingsRequest:
    service.check_notification_settings(request)
    return request


@router.get("/coupons")
async def list_coupons(db: Database = Depends(get_db)) -> dict:
    rows = await repository.list_coupons(db)
    if not rows:
        raise NotFoundError("No coupons found")
    return envelope.ok(data=rows)


@router.get("/quiz")
async def random_quiz(
    category: str | None = Query(default=None),
    db: Database = Depends(get_db),
) -> dict:
    wanted = (category or "").strip()
    rows = await repository.random_quiz(db, None if wanted in ("", "ALL") else wanted)
    if not rows:
        raise NotFoundError("No quiz found")
    return envelope.ok(dataQuiz=rows)


@router.get("/tips")
async def list_tips(db: Database = Depends(get_db)) -> dict:
    rows = await repository.list_tips(db)
    if not rows:
        raise NotFoundError("Not found curated tips")
    return envelope.ok(data=rows)


@router.get("/tips/notification")
async def notification_tips(
    user_id: int = Depends(tips_user_id),
    db: Database = Depends(get_db),
) -> dict:
    return await service.notification_tips(db, user_id)


@router.put("/tips/notification")
async def save_notification_settings(
    request: schemas.NotificationSettingsRequest = Depends(settings_change),
    user_id: int = Depends(tips_user_id),
    db: Database = Depends(get_db),
) -> dict:
    return await service.save_notification_settings(db, user_id, request)


@router.post("/voiceCommand")
async def voice_command(request: schemas.VoiceCommandRequest) -> dict:
    return envelope.ok(message=service.voice_command(request.text))
