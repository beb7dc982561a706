"""
Ownership guards.

Each guard answers "does this user own this row" with one parameterized query
against the join/ownership table. Guards fail closed: a database error is
logged and reported as "not owned", never as "authorized". Nothing is cached.
"""

from __future__ import annotations

import logging

from core.db import Queryable

logger = logging.getLogger(__name__)


async def _exists(db: Queryable, sql: str, *args: object, guard: str) -> bool:
    try:
        row = await db.fetch_one(sql, *args)
    except Exception:
        logger.exception("ownership_check_failed guard=%s args=%s", guard, args)
        return False
    return row is not None


async def baby_belongs_to_user(db: Queryable, baby_id: int, user_id: int) -> bool:
    return await _exists(
        db,
        "SELECT baby_id FROM user_baby WHERE baby_id = $1 AND user_id = $2",
        baby_id,
        user_id,
        guard="baby",
    )


async def post_belongs_to_user(db: Queryable, post_id: int, user_id: int) -> bool:
    return await _exists(
        db,
        "SELECT post_id FROM forumpost WHERE post_id = $1 AND user_id = $2",
        post_id,
        user_id,
        guard="post",
    )


async def reply_belongs_to_user(db: Queryable, reply_id: int, user_id: int) -> bool:
    return await _exists(
        db,
        "SELECT reply_id FROM forumreply WHERE reply_id = $1 AND user_id = $2",
        reply_id,
        user_id,
        guard="reply",
    )


async def journal_entry_belongs_to_user(db: Queryable, entry_id: int, user_id: int) -> bool:
    return await _exists(
        db,
        "SELECT entry_id FROM journalentry WHERE entry_id = $1 AND user_id = $2",
        entry_id,
        user_id,
        guard="journal_entry",
    )


async def baby_assigned_to_doctor(db: Queryable, baby_id: int, doctor_id: int) -> bool:
    return await _exists(
        db,
        "SELECT baby_id FROM doctor_baby WHERE baby_id = $1 AND doctor_id = $2",
        baby_id,
        doctor_id,
        guard="doctor_baby",
    )
