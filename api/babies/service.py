"""
Baby profile business logic.
"""

from __future__ import annotations

import logging

from core.db import Database
from core.errors import NotFoundError, ValidationError
from core.params import require_fields

from . import repository, schemas

logger = logging.getLogger(__name__)

_CREATE_REQUIRED = ["first_name", "last_name", "gender", "weight"]
_UPDATE_REQUIRED = ["first_name", "last_name", "gender", "weight", "birthdate", "height"]


def check_new_baby(payload: schemas.BabyProfile) -> None:
    require_fields(payload.model_dump(), _CREATE_REQUIRED)


def updated_profile(payload: schemas.UpdateBabyRequest) -> schemas.BabyProfile:
    if payload.data is None:
        raise ValidationError("Missing required parameters: data object")
    require_fields(payload.data.model_dump(), _UPDATE_REQUIRED)
    return payload.data


async def create_baby(db: Database, user_id: int, payload: schemas.BabyProfile) -> dict:
    """
    Insert the baby and link it to `user_id` in one transaction.
    """
    async with db.transaction() as conn:
        baby = await repository.create_baby(
            conn,
            first_name=payload.first_name,
            last_name=payload.last_name,
            gender=payload.gender,
            weight=payload.weight,
            birthdate=payload.birthdate,
            height=payload.height,
        )
        await repository.link_baby_to_user(conn, user_id=user_id, baby_id=baby["baby_id"])

    logger.info("baby_created user_id=%s baby_id=%s", user_id, baby["baby_id"])
    return baby


async def update_baby(db: Database, baby_id: int, profile: schemas.BabyProfile) -> dict:
    row = await repository.update_baby(
        db,
        baby_id=baby_id,
        first_name=profile.first_name,
        last_name=profile.last_name,
        gender=profile.gender,
        weight=profile.weight,
        birthdate=profile.birthdate,
        height=profile.height,
    )
    if row is None:
        raise NotFoundError("Baby not found")
    return row


async def delete_baby(db: Database, user_id: int, baby_id: int) -> None:
    async with db.transaction() as conn:
        if not await repository.unlink_baby_from_user(conn, user_id=user_id, baby_id=baby_id):
            raise NotFoundError("Baby not found")
        if not await repository.delete_babies(conn, [baby_id]):
            raise NotFoundError("Baby not found")
    logger.info("baby_deleted user_id=%s baby_id=%s", user_id, baby_id)
