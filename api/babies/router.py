"""
Baby profile API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import ownership
from auth.dependencies import BabyAccess, get_current_user_id, owned_baby, path_self
from core import envelope
from core.db import Database, get_db
from core.errors import AuthorizationError, NotFoundError
from core.params import path_id

from . import repository, schemas, service

router = APIRouter()

baby_id_param = path_id("baby_id", "baby ID")
baby_access = owned_baby("baby_id", "baby ID", "Access denied: Baby does not belong to current user")


async def new_baby(request: schemas.BabyProfile) -> schemas.BabyProfile:
    service.check_new_baby(request)
    return request


async def profile_update(request: schemas.UpdateBabyRequest) -> schemas.BabyProfile:
    return service.updated_profile(request)


@router.post("/baby", status_code=201)
async def create_baby(
    request: schemas.BabyProfile = Depends(new_baby),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    baby = await service.create_baby(db, user_id, request)
    return envelope.ok(data=baby)


@router.get("/babies")
async def list_babies(
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    babies = await repository.list_user_babies(db, user_id)
    if not babies:
        raise NotFoundError("No baby profiles found for this user")
    return envelope.ok(babies=babies)


@router.get("/baby/{baby_id}")
async def get_baby(
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    baby = await repository.get_baby(db, access.baby_id)
    if baby is None:
        raise NotFoundError("Baby not found")
    return envelope.ok(data=baby)


@router.get("/doctor/{doctor_id}/baby/{baby_id}/profile")
async def get_baby_for_doctor(
    baby_id: int = Depends(baby_id_param),
    doctor_id: int = Depends(path_self("doctor_id", "doctor ID")),
    db: Database = Depends(get_db),
) -> dict:
    if not await ownership.baby_assigned_to_doctor(db, baby_id, doctor_id):
        raise AuthorizationError("Access denied: Baby is not assigned to this doctor")
    baby = await repository.get_baby(db, baby_id)
    if baby is None:
        raise NotFoundError("Baby not found")
    return envelope.ok(data=baby)


@router.put("/baby/{baby_id}")
async def update_baby(
    baby_id: int = Depends(baby_id_param),
    profile: schemas.BabyProfile = Depends(profile_update),
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    baby = await service.update_baby(db, access.baby_id, profile)
    return envelope.success(data=baby)


@router.delete("/baby/{baby_id}")
async def delete_baby(
    access: BabyAccess = Depends(baby_access),
    db: Database = Depends(get_db),
) -> dict:
    await service.delete_baby(db, access.user_id, access.baby_id)
    return {"success": True, "message": "Baby profile deleted successfully"}
