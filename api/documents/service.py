"""
Document sharing rules between a baby's parent and the baby's doctor.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

from fastapi import UploadFile

from auth import ownership
from core.db import Database
from core.errors import AuthorizationError, ValidationError

from . import repository

logger = logging.getLogger(__name__)

DEFAULT_MIMETYPE = "application/octet-stream"


async def check_care_link(db: Database, *, baby_id: int, parent_id: int, doctor_id: int) -> None:
    """
    Both sides of a share must be linked to the baby: the parent through
    `user_baby`, the doctor through `doctor_baby`.
    """
    if not await ownership.baby_belongs_to_user(db, baby_id, parent_id):
        raise AuthorizationError("Access denied: Baby does not belong to this parent")
    if not await ownership.baby_assigned_to_doctor(db, baby_id, doctor_id):
        raise AuthorizationError("Access denied: Baby is not assigned to this doctor")


def require_upload(upload: UploadFile | None) -> UploadFile:
    if upload is None or not upload.filename:
        raise ValidationError("No file uploaded")
    return upload


async def store_upload(
    db: Database,
    upload: UploadFile,
    *,
    baby_id: int,
    uploaded_by: int,
    shared_with: int,
    is_from_doctor: bool,
) -> dict:
    data = await upload.read()
    row = await repository.create_document(
        db,
        filename=upload.filename,
        file_data=data,
        mimetype=upload.content_type or DEFAULT_MIMETYPE,
        baby_id=baby_id,
        uploaded_by=uploaded_by,
        shared_with=shared_with,
        is_from_doctor=is_from_doctor,
    )
    logger.info(
        "document_uploaded document_id=%s baby_id=%s from_doctor=%s bytes=%d",
        row["document_id"],
        baby_id,
        is_from_doctor,
        len(data),
    )
    return row


def content_disposition(filename: str) -> str:
    return f'attachment; filename="{quote(filename, safe=" ()-_.")}"'
