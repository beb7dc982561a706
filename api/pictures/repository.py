"""
Profile image persistence.
"""

from __future__ import annotations

from core.db import Queryable

# Table holding the `profile_picture_url` column for each entity type.
_OWNER_TABLES = {
    "user": ("users", "user_id"),
    "baby": ("baby", "baby_id"),
}


async def get_image(db: Queryable, entity_type: str, entity_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT image_data, mime_type, width, height, file_size, is_animated, original_filename
        FROM profile_images
        WHERE entity_type = $1
          AND entity_id = $2
        """,
        entity_type,
        entity_id,
    )


async def upsert_image(
    db: Queryable,
    *,
    entity_type: str,
    entity_id: int,
    image_data: bytes,
    mime_type: str,
    original_filename: str,
    width: int,
    height: int,
    is_animated: bool,
) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO profile_images
            (entity_type, entity_id, image_data, mime_type, original_filename, file_size,
             width, height, is_animated)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
        ON CONFLICT (entity_type, entity_id) DO UPDATE
        SET image_data = EXCLUDED.image_data,
            mime_type = EXCLUDED.mime_type,
            original_filename = EXCLUDED.original_filename,
            file_size = EXCLUDED.file_size,
            width = EXCLUDED.width,
            height = EXCLUDED.height,
            is_animated = EXCLUDED.is_animated,
            updated_at = CURRENT_TIMESTAMP
        RETURNING image_id
        """,
        entity_type,
        entity_id,
        image_data,
        mime_type,
        original_filename,
        len(image_data),
        width,
        height,
        is_animated,
    )
    if row is None:
        raise RuntimeError("Failed to store profile image.")
    return int(row["image_id"])


async def delete_image(db: Queryable, entity_type: str, entity_id: int) -> None:
    await db.execute(
        "DELETE FROM profile_images WHERE entity_type = $1 AND entity_id = $2",
        entity_type,
        entity_id,
    )


async def set_profile_url(db: Queryable, entity_type: str, entity_id: int, url: str) -> None:
    table, key = _OWNER_TABLES[entity_type]
    await db.execute(f"UPDATE {table} SET profile_picture_url = $1 WHERE {key} = $2", url, entity_id)
