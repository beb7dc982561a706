"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core import envelope
from core.db import Database, get_db

from . import schemas, service

router = APIRouter()


@router.post("/login")
async def login(
    request: schemas.LoginRequest,
    db: Database = Depends(get_db),
) -> dict:
    result = await service.login(db, request)
    return envelope.ok(**result)


@router.post("/signup")
async def signup(
    request: schemas.SignupRequest,
    db: Database = Depends(get_db),
) -> dict:
    user_row = await service.signup(db, request)
    return envelope.ok(data=user_row)
