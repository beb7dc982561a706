"""
User profile persistence.
"""

from __future__ import annotations

from datetime import datetime

from core.db import Queryable

_COLUMNS = "user_id, first_name, last_name, email, role, profile_picture_url, created_at"


async def get_user(db: Queryable, user_id: int) -> dict | None:
    return await db.fetch_one(f"SELECT {_COLUMNS} FROM users WHERE user_id = $1", user_id)


async def update_user(
    db: Queryable,
    *,
    user_id: int,
    first_name: str | None,
    last_name: str | None,
    email: str | None,
    role: str | None,
    created_at: datetime | None,
) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE users
        SET first_name = COALESCE($1, first_name),
            last_name = COALESCE($2, last_name),
            email = COALESCE($3, email),
            role = COALESCE($4, role),
            created_at = COALESCE($5, created_at)
        WHERE user_id = $6
        RETURNING {_COLUMNS}
        """,
        first_name,
        last_name,
        email,
        role,
        created_at,
        user_id,
    )


async def update_credentials_email(db: Queryable, *, old_email: str, new_email: str) -> None:
    await db.execute(
        "UPDATE authentication SET email = $1 WHERE lower(email) = lower($2)",
        new_email,
        old_email,
    )


async def unlink_user_babies(db: Queryable, user_id: int) -> list[int]:
    rows = await db.fetch_all(
        "DELETE FROM user_baby WHERE user_id = $1 RETURNING baby_id",
        user_id,
    )
    return [int(row["baby_id"]) for row in rows]


async def delete_user(db: Queryable, user_id: int) -> dict | None:
    """
    Delete the user row and its credentials; returns the deleted row.
    """
    row = await db.fetch_one(
        "DELETE FROM users WHERE user_id = $1 RETURNING user_id, email",
        user_id,
    )
    if row is None:
        return None
    await db.execute("DELETE FROM authentication WHERE lower(email) = lower($1)", row["email"])
    await db.execute(
        "DELETE FROM profile_images WHERE entity_type = 'user' AND entity_id = $1",
        user_id,
    )
    return row
