"""
Growth record persistence.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from core.db import Queryable

_COLUMNS = "growth_id, baby_id, TO_CHAR(date, 'YYYY-MM-DD') AS date, height, weight, notes"


async def list_growth_records(db: Queryable, baby_id: int) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM growth
        WHERE baby_id = $1
        ORDER BY date DESC, growth_id DESC
        """,
        baby_id,
    )


async def create_growth_record(
    db: Queryable,
    *,
    baby_id: int,
    record_date: date | None,
    height: Decimal,
    weight: Decimal,
    notes: str | None,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO growth (baby_id, date, height, weight, notes)
        VALUES ($1, COALESCE($2, CURRENT_DATE), $3, $4, $5)
        RETURNING {_COLUMNS}
        """,
        baby_id,
        record_date,
        height,
        weight,
        notes,
    )
    if row is None:
        raise RuntimeError("Failed to create growth record.")
    return row


async def update_growth_record(
    db: Queryable,
    *,
    growth_id: int,
    baby_id: int,
    record_date: date | None,
    height: Decimal | None,
    weight: Decimal | None,
    notes: str | None,
) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE growth
        SET date = COALESCE($1, date),
            height = COALESCE($2, height),
            weight = COALESCE($3, weight),
            notes = COALESCE($4, notes)
        WHERE growth_id = $5
          AND baby_id = $6
        RETURNING {_COLUMNS}
        """,
        record_date,
        height,
        weight,
        notes,
        growth_id,
        baby_id,
    )


async def delete_growth_record(db: Queryable, *, growth_id: int, baby_id: int) -> bool:
    row = await db.fetch_one(
        "DELETE FROM growth WHERE growth_id = $1 AND baby_id = $2 RETURNING growth_id",
        growth_id,
        baby_id,
    )
    return row is not None
