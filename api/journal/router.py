"""
Journal API endpoints.

Errors on this router use the bare `{"error": {"message": ...}}` shape.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form

from auth.dependencies import get_current_user_id, require_user
from core import envelope
from core.db import Database, get_db
from core.errors import AuthenticationError, NotFoundError
from core.params import path_id

from . import repository, schemas, service

router = APIRouter(dependencies=[Depends(envelope.bare_errors)])

entry_id_param = path_id("id", "entry ID", "Invalid entry ID provided")

creating_user_id = require_user(
    missing_user=AuthenticationError,
    missing_user_message="User not authenticated",
)


async def journal_draft(
    title: str | None = Form(default=None),
    text: str | None = Form(default=None),
    date: str | None = Form(default=None),
    tags: str | None = Form(default=None),
) -> service.JournalDraft:
    return service.validate_draft(title, text, date, tags)


@router.post("/journal", status_code=201)
async def create_entry(
    draft: service.JournalDraft = Depends(journal_draft),
    user_id: int = Depends(creating_user_id),
    db: Database = Depends(get_db),
) -> dict:
    return await service.create_entry(db, user_id, draft)


@router.get("/journal")
async def list_entries(
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    rows = await repository.list_entries(db, user_id)
    if not rows:
        raise NotFoundError("No journal entries found. Try to create one")
    return envelope.ok(data=rows)


@router.get("/journal/{id}")
async def get_entry(
    entry_id: int = Depends(entry_id_param),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    row = await repository.get_entry(db, entry_id=entry_id, user_id=user_id)
    if row is None:
        raise NotFoundError("Journal entry not found")
    return {**row, "status": "ok"}


@router.put("/journal/{id}")
async def update_entry(
    request: schemas.UpdateJournalEntryRequest,
    entry_id: int = Depends(entry_id_param),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    row = await service.update_entry(db, user_id, entry_id, request)
    return envelope.ok(data=row)


@router.delete("/journal/{id}")
async def delete_entry(
    entry_id: int = Depends(entry_id_param),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    await service.delete_entry(db, user_id, entry_id)
    return envelope.ok(message="Journal entry deleted successfully")
