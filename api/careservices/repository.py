"""
Childcare provider persistence.

Providers live in the childcare database; favorites and the provider
reference rows they point at live in the main database.
"""

from __future__ import annotations

from core.db import Queryable


async def list_providers(childcare_db: Queryable) -> list[dict]:
    """
    One row per distinct provider listing; the trailing postal code is split
    off `location`.
    """
    return await childcare_db.fetch_all(
        r"""
        SELECT DISTINCT ON (name, rating, hourly_rate, experience, title, description)
               id,
               provider_type,
               REGEXP_REPLACE(location, '^(.*)\s+([A-Z0-9]+)$', '\2') AS postal_code,
               REGEXP_REPLACE(location, '\s+[A-Z0-9]+$', '') AS location,
               name,
               rating,
               reviews_count,
               experience,
               age,
               hourly_rate,
               title,
               description AS bio,
               premium AS is_premium,
               profile_url,
               profile_image,
               verification_count AS verification,
               hired_count
        FROM child_providers
        ORDER BY name, rating, hourly_rate, experience, title, description, id
        """
    )


async def provider_exists(childcare_db: Queryable, provider_id: int) -> bool:
    row = await childcare_db.fetch_one("SELECT id FROM child_providers WHERE id = $1", provider_id)
    return row is not None


async def ensure_provider_reference(db: Queryable, provider_id: int) -> None:
    await db.execute(
        """
        INSERT INTO childcare_providers (id, name)
        VALUES ($1, $2)
        ON CONFLICT (id) DO NOTHING
        """,
        provider_id,
        f"Provider {provider_id}",
    )


async def list_favorite_ids(db: Queryable, user_id: int) -> list[int]:
    rows = await db.fetch_all(
        "SELECT provider_id FROM user_favorite_providers WHERE user_id = $1 ORDER BY provider_id",
        user_id,
    )
    return [int(row["provider_id"]) for row in rows]


async def add_favorite(db: Queryable, *, user_id: int, provider_id: int) -> None:
    await db.execute(
        """
        INSERT INTO user_favorite_providers (user_id, provider_id)
        VALUES ($1, $2)
        ON CONFLICT (user_id, provider_id) DO NOTHING
        """,
        user_id,
        provider_id,
    )


async def remove_favorite(db: Queryable, *, user_id: int, provider_id: int) -> None:
    await db.execute(
        "DELETE FROM user_favorite_providers WHERE user_id = $1 AND provider_id = $2",
        user_id,
        provider_id,
    )
