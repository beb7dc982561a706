"""
Shared health document persistence (parent <-> doctor, per baby).

File bytes are only read by `get_document`; list queries return metadata.
"""

from __future__ import annotations

from core.db import Queryable

_METADATA = """
    document_id,
    filename,
    mimetype,
    baby_id,
    uploaded_by,
    shared_with,
    is_from_doctor,
    created_at
"""


async def create_document(
    db: Queryable,
    *,
    filename: str,
    file_data: bytes,
    mimetype: str,
    baby_id: int,
    uploaded_by: int,
    shared_with: int,
    is_from_doctor: bool,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO sharing_health_documents_baby_doctor
            (filename, file_data, mimetype, baby_id, uploaded_by, shared_with, is_from_doctor)
        VALUES ($1, $2, $3, $4, $5, $6, $7)
        RETURNING {_METADATA}
        """,
        filename,
        file_data,
        mimetype,
        baby_id,
        uploaded_by,
        shared_with,
        is_from_doctor,
    )
    if row is None:
        raise RuntimeError("Failed to store document.")
    return row


async def list_documents(
    db: Queryable,
    *,
    is_from_doctor: bool,
    uploaded_by: int | None = None,
    shared_with: int | None = None,
    baby_id: int | None = None,
) -> list[dict]:
    """
    Documents in one direction, narrowed by whichever of uploader, recipient
    and baby are given.
    """
    return await db.fetch_all(
        f"""
        SELECT {_METADATA}
        FROM sharing_health_documents_baby_doctor
        WHERE is_from_doctor = $1
          AND ($2::int IS NULL OR uploaded_by = $2)
          AND ($3::int IS NULL OR shared_with = $3)
          AND ($4::int IS NULL OR baby_id = $4)
        ORDER BY created_at DESC, document_id DESC
        """,
        is_from_doctor,
        uploaded_by,
        shared_with,
        baby_id,
    )


async def get_document(db: Queryable, document_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT document_id, filename, mimetype, file_data, uploaded_by, shared_with
        FROM sharing_health_documents_baby_doctor
        WHERE document_id = $1
        """,
        document_id,
    )
