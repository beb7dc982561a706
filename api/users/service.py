"""
User profile business logic.
"""

from __future__ import annotations

import logging

import asyncpg

from auth.repository import normalize_email
from babies import repository as babies_repository
from core.db import Database
from core.errors import ConflictError, NotFoundError

from . import repository, schemas

logger = logging.getLogger(__name__)


async def update_user(db: Database, user_id: int, payload: schemas.UpdateUserRequest) -> dict:
    """
    Partial profile update. An email change is mirrored into the credentials
    table in the same transaction.
    """
    new_email = normalize_email(payload.email) if payload.email else None
    try:
        async with db.transaction() as conn:
            current = await repository.get_user(conn, user_id)
            if current is None:
                raise NotFoundError("User profile not found")

            row = await repository.update_user(
                conn,
                user_id=user_id,
                first_name=payload.first_name,
                last_name=payload.last_name,
                email=new_email,
                role=payload.role,
                created_at=payload.created_at,
            )
            if row is None:
                raise NotFoundError("User profile not found")
            if new_email and new_email != current["email"]:
                await repository.update_credentials_email(
                    conn, old_email=current["email"], new_email=new_email
                )
    except asyncpg.UniqueViolationError as exc:
        raise ConflictError("Email is already registered") from exc

    logger.info("user_updated user_id=%s", user_id)
    return row


async def delete_user(db: Database, user_id: int) -> None:
    """
    Remove the user, the babies linked to them, and their credentials.
    """
    async with db.transaction() as conn:
        baby_ids = await repository.unlink_user_babies(conn, user_id)
        await babies_repository.delete_babies(conn, baby_ids)
        if await repository.delete_user(conn, user_id) is None:
            raise NotFoundError("User not found")

    logger.info("user_deleted user_id=%s baby_ids=%s", user_id, baby_ids)
