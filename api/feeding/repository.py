"""
Feeding schedule persistence.
"""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from core.db import Queryable

_COLUMNS = """
    feeding_schedule_id,
    baby_id,
    meal,
    TO_CHAR(date, 'YYYY-MM-DD') AS date,
    TO_CHAR(time, 'HH24:MI:SS') AS time,
    type,
    amount,
    issues,
    notes
"""


async def list_feeding_schedules(db: Queryable, baby_id: int) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM feedingschedule
        WHERE baby_id = $1
        ORDER BY date DESC, time DESC
        """,
        baby_id,
    )


async def get_latest_feed(db: Queryable, baby_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM feedingschedule
        WHERE baby_id = $1
        ORDER BY date DESC, time DESC
        LIMIT 1
        """,
        baby_id,
    )


async def create_feeding_schedule(
    db: Queryable,
    *,
    baby_id: int,
    meal: str,
    feed_time: time,
    feed_type: str,
    amount: Decimal,
    issues: str | None,
    notes: str | None,
    feed_date: date | None,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO feedingschedule (baby_id, meal, time, type, amount, issues, notes, date)
        VALUES ($1, $2, $3, $4, $5, $6, $7, COALESCE($8, CURRENT_DATE))
        RETURNING {_COLUMNS}
        """,
        baby_id,
        meal,
        feed_time,
        feed_type,
        amount,
        issues,
        notes,
        feed_date,
    )
    if row is None:
        raise RuntimeError("Failed to create feeding schedule.")
    return row


async def update_feeding_schedule(
    db: Queryable,
    *,
    feeding_schedule_id: int,
    baby_id: int,
    meal: str | None,
    feed_time: time | None,
    feed_type: str | None,
    amount: Decimal | None,
    issues: str | None,
    notes: str | None,
    feed_date: date | None,
) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE feedingschedule
        SET meal = COALESCE($1, meal),
            time = COALESCE($2, time),
            type = COALESCE($3, type),
            amount = COALESCE($4, amount),
            issues = COALESCE($5, issues),
            notes = COALESCE($6, notes),
            date = COALESCE($7, date)
        WHERE feeding_schedule_id = $8
          AND baby_id = $9
        RETURNING {_COLUMNS}
        """,
        meal,
        feed_time,
        feed_type,
        amount,
        issues,
        notes,
        feed_date,
        feeding_schedule_id,
        baby_id,
    )


async def delete_feeding_schedule(db: Queryable, *, feeding_schedule_id: int, baby_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM feedingschedule
        WHERE feeding_schedule_id = $1
          AND baby_id = $2
        RETURNING feeding_schedule_id
        """,
        feeding_schedule_id,
        baby_id,
    )
    return row is not None
