"""
Auth persistence helpers.
"""

from __future__ import annotations

from core.db import Queryable


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def get_user_id_by_email(db: Queryable, email: str) -> int | None:
    row = await db.fetch_one(
        """
        SELECT user_id
        FROM users
        WHERE email = $1
        """,
        email,
    )
    return int(row["user_id"]) if row is not None else None


async def get_user_by_email(db: Queryable, email: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT user_id, first_name, last_name, email, role, created_at
        FROM users
        WHERE lower(email) = lower($1)
        """,
        normalize_email(email),
    )


async def get_credentials_by_email(db: Queryable, email: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT email, password
        FROM authentication
        WHERE lower(email) = lower($1)
        """,
        normalize_email(email),
    )


async def create_user(
    db: Queryable,
    *,
    first_name: str,
    last_name: str,
    email: str,
    role: str,
) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO users (first_name, last_name, email, role)
        VALUES ($1, $2, $3, $4)
        RETURNING *
        """,
        first_name,
        last_name,
        normalize_email(email),
        role,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def create_credentials(db: Queryable, *, email: str, password_hash: str) -> None:
    await db.execute(
        """
        INSERT INTO authentication (email, password)
        VALUES ($1, $2)
        """,
        normalize_email(email),
        password_hash,
    )
