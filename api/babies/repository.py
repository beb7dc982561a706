"""
Baby profile persistence.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from core.db import Queryable

_COLUMNS = """
    baby_id,
    first_name,
    last_name,
    gender,
    weight,
    height,
    TO_CHAR(birthdate, 'YYYY-MM-DD') AS birthdate,
    profile_picture_url,
    created_at
"""


async def create_baby(
    db: Queryable,
    *,
    first_name: str,
    last_name: str,
    gender: str,
    weight: Decimal,
    birthdate: date | None,
    height: Decimal | None,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO baby (first_name, last_name, gender, weight, birthdate, height)
        VALUES ($1, $2, $3, $4, $5, $6)
        RETURNING {_COLUMNS}
        """,
        first_name,
        last_name,
        gender,
        weight,
        birthdate,
        height,
    )
    if row is None:
        raise RuntimeError("Failed to create baby profile.")
    return row


async def link_baby_to_user(db: Queryable, *, user_id: int, baby_id: int) -> None:
    await db.execute(
        "INSERT INTO user_baby (user_id, baby_id) VALUES ($1, $2)",
        user_id,
        baby_id,
    )


async def list_user_babies(db: Queryable, user_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT b.baby_id,
               b.first_name,
               b.last_name,
               b.gender,
               b.weight,
               b.height,
               TO_CHAR(b.birthdate, 'YYYY-MM-DD') AS birthdate,
               b.profile_picture_url,
               b.created_at
        FROM baby b
        JOIN user_baby ub ON ub.baby_id = b.baby_id
        WHERE ub.user_id = $1
        ORDER BY b.baby_id ASC
        """,
        user_id,
    )


async def get_baby(db: Queryable, baby_id: int) -> dict | None:
    return await db.fetch_one(f"SELECT {_COLUMNS} FROM baby WHERE baby_id = $1", baby_id)


async def update_baby(
    db: Queryable,
    *,
    baby_id: int,
    first_name: str,
    last_name: str,
    gender: str,
    weight: Decimal,
    birthdate: date,
    height: Decimal,
) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE baby
        SET first_name = $1,
            last_name = $2,
            gender = $3,
            weight = $4,
            birthdate = $5,
            height = $6
        WHERE baby_id = $7
        RETURNING {_COLUMNS}
        """,
        first_name,
        last_name,
        gender,
        weight,
        birthdate,
        height,
        baby_id,
    )


async def unlink_baby_from_user(db: Queryable, *, user_id: int, baby_id: int) -> bool:
    row = await db.fetch_one(
        "DELETE FROM user_baby WHERE user_id = $1 AND baby_id = $2 RETURNING baby_id",
        user_id,
        baby_id,
    )
    return row is not None


async def delete_babies(db: Queryable, baby_ids: list[int]) -> list[int]:
    """
    Delete babies and their stored pictures; child records cascade in the schema.
    """
    if not baby_ids:
        return []
    await db.execute(
        "DELETE FROM profile_images WHERE entity_type = 'baby' AND entity_id = ANY($1::int[])",
        baby_ids,
    )
    rows = await db.fetch_all(
        "DELETE FROM baby WHERE baby_id = ANY($1::int[]) RETURNING baby_id",
        baby_ids,
    )
    return [int(row["baby_id"]) for row in rows]
