"""
Document sharing API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Response, UploadFile

from auth.dependencies import get_current_user_id, path_self
from core import envelope
from core.db import Database, get_db
from core.errors import AuthorizationError, NotFoundError
from core.params import path_id

from . import repository, service

router = APIRouter()

baby_id_param = path_id("babyId", "baby ID")
doctor_id_param = path_id("doctorId", "doctor ID")
parent_id_param = path_id("parentId", "parent ID")

doctor_self = path_self("doctorId", "doctor ID", "Not authorized to access this doctor's files")
parent_self = path_self("parentId", "parent ID", "Not authorized to access this parent's files")


async def uploaded_document(document: UploadFile | None = File(default=None)) -> UploadFile:
    return service.require_upload(document)


def _files_or_404(rows: list[dict]) -> dict:
    if not rows:
        raise NotFoundError("Files not found in database")
    return envelope.ok(files=rows)


@router.post("/parent/{parentId}/babies/{babyId}/doctors/{doctorId}/uploadFile")
async def parent_upload(
    baby_id: int = Depends(baby_id_param),
    doctor_id: int = Depends(doctor_id_param),
    document: UploadFile = Depends(uploaded_document),
    parent_id: int = Depends(parent_self),
    db: Database = Depends(get_db),
) -> dict:
    await service.check_care_link(db, baby_id=baby_id, parent_id=parent_id, doctor_id=doctor_id)
    row = await service.store_upload(
        db,
        document,
        baby_id=baby_id,
        uploaded_by=parent_id,
        shared_with=doctor_id,
        is_from_doctor=False,
    )
    return envelope.ok(file=row)


@router.post("/doctor/{doctorId}/babies/{babyId}/parent/{parentId}/uploadFile")
async def doctor_upload(
    baby_id: int = Depends(baby_id_param),
    parent_id: int = Depends(parent_id_param),
    document: UploadFile = Depends(uploaded_document),
    doctor_id: int = Depends(doctor_self),
    db: Database = Depends(get_db),
) -> dict:
    await service.check_care_link(db, baby_id=baby_id, parent_id=parent_id, doctor_id=doctor_id)
    row = await service.store_upload(
        db,
        document,
        baby_id=baby_id,
        uploaded_by=doctor_id,
        shared_with=parent_id,
        is_from_doctor=True,
    )
    return envelope.ok(file=row)


@router.get("/doctor/{doctorId}/getAllFiles")
async def doctor_received_files(
    doctor_id: int = Depends(doctor_self),
    db: Database = Depends(get_db),
) -> dict:
    rows = await repository.list_documents(db, is_from_doctor=False, shared_with=doctor_id)
    return _files_or_404(rows)


@router.get("/doctor/{doctorId}/getSentFiles")
async def doctor_sent_files(
    doctor_id: int = Depends(doctor_self),
    db: Database = Depends(get_db),
) -> dict:
    rows = await repository.list_documents(db, is_from_doctor=True, uploaded_by=doctor_id)
    return _files_or_404(rows)


@router.get("/parent/{parentId}/doctors/{doctorId}/babies/{babyId}/getFiles")
async def parent_received_files(
    baby_id: int = Depends(baby_id_param),
    doctor_id: int = Depends(doctor_id_param),
    parent_id: int = Depends(parent_self),
    db: Database = Depends(get_db),
) -> dict:
    rows = await repository.list_documents(
        db,
        is_from_doctor=True,
        uploaded_by=doctor_id,
        shared_with=parent_id,
        baby_id=baby_id,
    )
    return _files_or_404(rows)


@router.get("/parent/{parentId}/babies/{babyId}/doctors/{doctorId}/getSentFiles")
async def parent_sent_files(
    baby_id: int = Depends(baby_id_param),
    doctor_id: int = Depends(doctor_id_param),
    parent_id: int = Depends(parent_self),
    db: Database = Depends(get_db),
) -> dict:
    rows = await repository.list_documents(
        db,
        is_from_doctor=False,
        uploaded_by=parent_id,
        shared_with=doctor_id,
        baby_id=baby_id,
    )
    return _files_or_404(rows)


@router.get("/documents/{document_id}/download")
async def download_document(
    document_id: int = Depends(path_id("document_id", "document ID")),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> Response:
    row = await repository.get_document(db, document_id)
    if row is None:
        raise NotFoundError("File not found in database")
    if user_id not in (row["uploaded_by"], row["shared_with"]):
        raise AuthorizationError("Not authorized to download this file")

    return Response(
        content=bytes(row["file_data"]),
        media_type=row["mimetype"] or service.DEFAULT_MIMETYPE,
        headers={"Content-Disposition": service.content_disposition(row["filename"])},
    )
