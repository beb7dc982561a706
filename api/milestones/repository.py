"""
Milestone persistence.
"""

from __future__ import annotations

from datetime import date

from core.db import Queryable

_COLUMNS = "milestone_id, baby_id, TO_CHAR(date, 'YYYY-MM-DD') AS date, title, details"


async def list_user_milestones(db: Queryable, user_id: int, *, today_only: bool) -> list[dict]:
    """
    Milestones across every baby linked to `user_id`, with the baby's name.
    """
    today_filter = "AND m.date = CURRENT_DATE" if today_only else ""
    return await db.fetch_all(
        f"""
        SELECT m.milestone_id,
               m.baby_id,
               TO_CHAR(m.date, 'YYYY-MM-DD') AS date,
               m.title,
               m.details,
               COALESCE(b.first_name, 'Unknown') AS first_name,
               COALESCE(b.last_name, '') AS last_name
        FROM milestones m
        JOIN user_baby ub ON ub.baby_id = m.baby_id
        LEFT JOIN baby b ON b.baby_id = m.baby_id
        WHERE ub.user_id = $1
          {today_filter}
        ORDER BY m.date DESC, m.milestone_id DESC
        """,
        user_id,
    )


async def list_baby_milestones(db: Queryable, baby_id: int) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM milestones
        WHERE baby_id = $1
        ORDER BY date DESC, milestone_id DESC
        """,
        baby_id,
    )


async def create_milestone(
    db: Queryable,
    *,
    baby_id: int,
    milestone_date: date | None,
    title: str,
    details: str | None,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO milestones (baby_id, date, title, details)
        VALUES ($1, COALESCE($2, CURRENT_DATE), $3, $4)
        RETURNING {_COLUMNS}
        """,
        baby_id,
        milestone_date,
        title,
        details,
    )
    if row is None:
        raise RuntimeError("Failed to create milestone.")
    return row


async def update_milestone(
    db: Queryable,
    *,
    milestone_id: int,
    baby_id: int,
    milestone_date: date | None,
    title: str | None,
    details: str | None,
) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE milestones
        SET date = COALESCE($1, date),
            title = COALESCE($2, title),
            details = COALESCE($3, details)
        WHERE milestone_id = $4
          AND baby_id = $5
        RETURNING {_COLUMNS}
        """,
        milestone_date,
        title,
        details,
        milestone_id,
        baby_id,
    )


async def delete_milestone(db: Queryable, *, milestone_id: int, baby_id: int) -> bool:
    row = await db.fetch_one(
        "DELETE FROM milestones WHERE milestone_id = $1 AND baby_id = $2 RETURNING milestone_id",
        milestone_id,
        baby_id,
    )
    return row is not None
