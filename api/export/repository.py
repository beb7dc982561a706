"""
Export queries: per-baby section rows inside a date range, and the export audit log.
"""

from __future__ import annotations

from datetime import date

from core.db import Queryable


async def user_created_on(db: Queryable, user_id: int) -> str | None:
    row = await db.fetch_one(
        "SELECT TO_CHAR(created_at, 'YYYY-MM-DD') AS created_at FROM users WHERE user_id = $1",
        user_id,
    )
    return row["created_at"] if row else None


async def list_export_babies(db: Queryable, user_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT b.baby_id,
               b.first_name,
               b.last_name,
               b.gender,
               b.weight,
               TO_CHAR(b.created_at, 'YYYY-MM-DD') AS created_at
        FROM baby b
        JOIN user_baby ub ON ub.baby_id = b.baby_id
        WHERE ub.user_id = $1
        ORDER BY b.baby_id ASC
        """,
        user_id,
    )


async def growth_in_range(db: Queryable, baby_id: int, start: date, end: date) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT growth_id, TO_CHAR(date, 'YYYY-MM-DD') AS date, weight, height, notes
        FROM growth
        WHERE baby_id = $1 AND date BETWEEN $2 AND $3
        ORDER BY date ASC, growth_id ASC
        """,
        baby_id,
        start,
        end,
    )


async def milestones_in_range(db: Queryable, baby_id: int, start: date, end: date) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT milestone_id, TO_CHAR(date, 'YYYY-MM-DD') AS date, title, details
        FROM milestones
        WHERE baby_id = $1 AND date BETWEEN $2 AND $3
        ORDER BY date ASC, milestone_id ASC
        """,
        baby_id,
        start,
        end,
    )


async def feedings_in_range(db: Queryable, baby_id: int, start: date, end: date) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT feeding_schedule_id,
               TO_CHAR(date, 'YYYY-MM-DD') AS date,
               TO_CHAR(time, 'HH24:MI:SS') AS time,
               meal,
               amount,
               type,
               issues,
               notes
        FROM feedingschedule
        WHERE baby_id = $1 AND date BETWEEN $2 AND $3
        ORDER BY date ASC, time ASC
        """,
        baby_id,
        start,
        end,
    )


async def stool_in_range(db: Queryable, baby_id: int, start: date, end: date) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT stool_id,
               TO_CHAR(timestamp, 'YYYY-MM-DD HH24:MI:SS') AS timestamp,
               color,
               consistency,
               notes
        FROM stool_entries
        WHERE baby_id = $1 AND timestamp::date BETWEEN $2 AND $3
        ORDER BY timestamp ASC
        """,
        baby_id,
        start,
        end,
    )


async def record_export(db: Queryable, *, file_name: str, file_format: str) -> None:
    await db.execute(
        "INSERT INTO exporteddocument (file_name, file_format, created_at) VALUES ($1, $2, NOW())",
        file_name,
        file_format,
    )
