"""
Stool log persistence.

Timestamps are stored as UTC wall-clock (`timestamp` without time zone) and
read back tagged as UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core.db import Queryable

_COLUMNS = """
    stool_id,
    baby_id,
    color,
    consistency,
    notes,
    timestamp AT TIME ZONE 'UTC' AS timestamp
"""


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


async def list_stool_entries(db: Queryable, baby_id: int) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM stool_entries
        WHERE baby_id = $1
        ORDER BY timestamp DESC
        """,
        baby_id,
    )


async def create_stool_entry(
    db: Queryable,
    *,
    baby_id: int,
    color: str,
    consistency: str,
    notes: str | None,
    timestamp: datetime | None,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO stool_entries (baby_id, color, consistency, notes, timestamp)
        VALUES ($1, $2, $3, $4, $5::timestamptz AT TIME ZONE 'UTC')
        RETURNING {_COLUMNS}
        """,
        baby_id,
        color,
        consistency,
        notes,
        _as_utc(timestamp) or datetime.now(timezone.utc),
    )
    if row is None:
        raise RuntimeError("Failed to create stool entry.")
    return row


async def update_stool_entry(
    db: Queryable,
    *,
    stool_id: int,
    baby_id: int,
    color: str | None,
    consistency: str | None,
    notes: str | None,
    timestamp: datetime | None,
) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE stool_entries
        SET color = COALESCE($1, color),
            consistency = COALESCE($2, consistency),
            notes = COALESCE($3, notes),
            timestamp = COALESCE($4::timestamptz AT TIME ZONE 'UTC', timestamp)
        WHERE stool_id = $5
          AND baby_id = $6
        RETURNING {_COLUMNS}
        """,
        color,
        consistency,
        notes,
        _as_utc(timestamp),
        stool_id,
        baby_id,
    )


async def delete_stool_entry(db: Queryable, *, stool_id: int, baby_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM stool_entries
        WHERE stool_id = $1
          AND baby_id = $2
        RETURNING stool_id
        """,
        stool_id,
        baby_id,
    )
    return row is not None
