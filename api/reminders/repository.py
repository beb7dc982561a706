"""
Reminder persistence.
"""

from __future__ import annotations

from datetime import date

from core.db import Queryable

_COLUMNS = """
    reminder_id,
    baby_id,
    title,
    time,
    TO_CHAR(date, 'YYYY-MM-DD') AS date,
    notes,
    is_active,
    next_reminder,
    reminder_in,
    created_at,
    updated_at
"""


async def list_reminders(db: Queryable, baby_id: int) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM reminders
        WHERE baby_id = $1
        ORDER BY date DESC, time ASC
        """,
        baby_id,
    )


async def list_upcoming_reminders(db: Queryable, baby_id: int, *, limit: int = 5) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS},
               'reminder' AS type
        FROM reminders
        WHERE baby_id = $1
          AND date >= CURRENT_DATE
          AND is_active = true
        ORDER BY date ASC, time ASC
        LIMIT $2
        """,
        baby_id,
        limit,
    )


async def create_reminder(
    db: Queryable,
    *,
    baby_id: int,
    title: str,
    time: str,
    reminder_date: date,
    notes: str | None,
    is_active: bool,
    next_reminder: bool,
    reminder_in: str | None,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO reminders (baby_id, title, time, date, notes, is_active, next_reminder, reminder_in)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
        RETURNING {_COLUMNS}
        """,
        baby_id,
        title,
        time,
        reminder_date,
        notes,
        is_active,
        next_reminder,
        reminder_in,
    )
    if row is None:
        raise RuntimeError("Failed to create reminder.")
    return row


async def update_reminder(
    db: Queryable,
    *,
    reminder_id: int,
    baby_id: int,
    title: str | None,
    time: str | None,
    reminder_date: date | None,
    notes: str | None,
    is_active: bool | None,
    next_reminder: bool | None,
    reminder_in: str | None,
) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE reminders
        SET title = COALESCE($1, title),
            time = COALESCE($2, time),
            date = COALESCE($3, date),
            notes = COALESCE($4, notes),
            is_active = COALESCE($5, is_active),
            next_reminder = COALESCE($6, next_reminder),
            reminder_in = COALESCE($7, reminder_in),
            updated_at = CURRENT_TIMESTAMP
        WHERE reminder_id = $8
          AND baby_id = $9
        RETURNING {_COLUMNS}
        """,
        title,
        time,
        reminder_date,
        notes,
        is_active,
        next_reminder,
        reminder_in,
        reminder_id,
        baby_id,
    )


async def delete_reminders(db: Queryable, *, reminder_ids: list[int], baby_id: int) -> list[int]:
    rows = await db.fetch_all(
        """
        DELETE FROM reminders
        WHERE reminder_id = ANY($1::int[])
          AND baby_id = $2
        RETURNING reminder_id
        """,
        reminder_ids,
        baby_id,
    )
    return [int(row["reminder_id"]) for row in rows]
