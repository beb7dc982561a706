"""
Medical professional and health record API endpoints.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import APIRouter, Depends

from auth import ownership
from auth.dependencies import get_current_user_id, path_self
from core import envelope
from core.db import Database, get_db
from core.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from core.params import is_valid_id, path_id

from . import repository, schemas, service

logger = logging.getLogger(__name__)

router = APIRouter()

doctor_id_param = path_id("doctor_id", "doctor ID")
doctor_self = path_self("doctor_id", "doctor ID", "Not authorized to view this doctor's patients")


async def connect_baby_id(request: schemas.ConnectRequest) -> int:
    if not is_valid_id(request.baby_id):
        raise ValidationError("Missing doctor_id or baby_id")
    return int(str(request.baby_id).strip())


@router.get("/medical-professional")
async def list_medical_professionals(
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    rows = await repository.list_medical_professionals(db)
    if not rows:
        raise NotFoundError("No medical professionals found")
    return envelope.ok(medicalProfessional=rows)


@router.post("/medical-professional/{doctor_id}/connect")
async def connect_doctor(
    doctor_id: int = Depends(doctor_id_param),
    baby_id: int = Depends(connect_baby_id),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    if not await ownership.baby_belongs_to_user(db, baby_id, user_id):
        raise AuthorizationError("Access denied: Baby does not belong to current user")
    if not await repository.is_medical_professional(db, doctor_id):
        raise NotFoundError("Medical professional not found")

    try:
        await repository.connect_doctor_and_baby(db, doctor_id=doctor_id, baby_id=baby_id)
    except asyncpg.UniqueViolationError as exc:
        raise ConflictError("Doctor and baby are already connected") from exc

    logger.info("doctor_connected doctor_id=%s baby_id=%s", doctor_id, baby_id)
    return envelope.ok(message="Doctor and baby are connected")


@router.get("/medical-professional/{doctor_id}/babies")
async def list_doctor_babies(
    doctor_id: int = Depends(doctor_self),
    db: Database = Depends(get_db),
) -> dict:
    rows = await repository.list_doctor_babies_with_parents(db, doctor_id)
    if not rows:
        raise NotFoundError("No baby information found")
    return envelope.ok(parents=service.group_babies_by_parent(rows))


@router.get("/medical-professional/{doctor_id}/getAssignedBabiesToDoctor")
async def list_my_babies_assigned_to_doctor(
    doctor_id: int = Depends(doctor_id_param),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    rows = await repository.list_parent_babies_assigned_to(db, doctor_id=doctor_id, parent_id=user_id)
    if not rows:
        raise NotFoundError("No assigned babies found for this doctor")
    return envelope.ok(babies=[service.baby_summary(row) for row in rows])


@router.get("/doctor/{doctorId}/healthRecords")
async def list_health_records(
    doctor_id: int = Depends(path_self("doctorId", "doctor ID", "Not authorized to view these records")),
    db: Database = Depends(get_db),
) -> dict:
    baby_ids = await repository.list_assigned_baby_ids(db, doctor_id)
    if not baby_ids:
        raise NotFoundError("No babies assigned to this doctor")
    records = await repository.list_health_records(db, baby_ids)
    return envelope.ok(combinedData=records)
