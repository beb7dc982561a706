"""
Journal entry persistence.
"""

from __future__ import annotations

from datetime import datetime

from core.db import Queryable

_COLUMNS = "entry_id, user_id, title, text, date, tags, created_at, updated_at"


async def create_entry(
    db: Queryable,
    *,
    user_id: int,
    title: str,
    text: str,
    entry_date: datetime,
    tags: list[str],
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO journalentry (user_id, title, text, date, tags)
        VALUES ($1, $2, $3, $4, $5::text[])
        RETURNING {_COLUMNS}
        """,
        user_id,
        title,
        text,
        entry_date,
        tags,
    )
    if row is None:
        raise RuntimeError("Failed to create journal entry.")
    return row


async def list_entries(db: Queryable, user_id: int) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM journalentry
        WHERE user_id = $1
        ORDER BY date DESC, entry_id DESC
        """,
        user_id,
    )


async def get_entry(db: Queryable, *, entry_id: int, user_id: int) -> dict | None:
    return await db.fetch_one(
        f"SELECT {_COLUMNS} FROM journalentry WHERE entry_id = $1 AND user_id = $2",
        entry_id,
        user_id,
    )


async def get_entry_owner(db: Queryable, entry_id: int) -> int | None:
    row = await db.fetch_one("SELECT user_id FROM journalentry WHERE entry_id = $1", entry_id)
    return int(row["user_id"]) if row is not None else None


async def update_entry(
    db: Queryable,
    *,
    entry_id: int,
    user_id: int,
    title: str,
    text: str,
    tags: list[str] | None,
) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE journalentry
        SET title = $1,
            text = $2,
            tags = $3::text[],
            updated_at = NOW()
        WHERE entry_id = $4
          AND user_id = $5
        RETURNING {_COLUMNS}
        """,
        title,
        text,
        tags,
        entry_id,
        user_id,
    )


async def delete_entry(db: Queryable, entry_id: int) -> None:
    await db.execute("DELETE FROM journalentry WHERE entry_id = $1", entry_id)
