"""
Journal entry validation and business logic.

Create validation collects every problem into `{"errors": [...]}`; update
validation stops at the first problem.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from auth import ownership
from core.db import Database
from core.errors import AuthorizationError, NotFoundError, ValidationError

from . import repository, schemas

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 255
MAX_TEXT_LENGTH = 10000
MAX_TAGS = 10
MAX_TAG_LENGTH = 30


@dataclass(frozen=True)
class JournalDraft:
    title: str
    text: str
    date: datetime
    tags: list[str]


def _tag_problems(tags: list[Any]) -> list[str]:
    problems = []
    if len(tags) > MAX_TAGS:
        problems.append(f"Maximum {MAX_TAGS} tags allowed")
    if any(not isinstance(tag, str) or len(tag) > MAX_TAG_LENGTH for tag in tags):
        problems.append(f"Tags must be strings of {MAX_TAG_LENGTH} characters or less")
    return problems


def _parse_date(raw: str) -> datetime | None:
    try:
        return datetime.fromisoformat(raw.strip())
    except ValueError:
        return None


def validate_draft(
    title: str | None,
    text: str | None,
    date: str | None,
    tags: str | None,
) -> JournalDraft:
    """
    Validate form fields for a new entry. `tags` arrives as a JSON array string.
    """
    parsed_tags: Any = []
    if tags:
        try:
            parsed_tags = json.loads(tags)
        except ValueError:
            parsed_tags = None
        if not isinstance(parsed_tags, list):
            raise ValidationError(body={"errors": ["Invalid tags format"]})

    errors: list[str] = []
    if not (title or "").strip():
        errors.append("Title is required")
    elif len(title) > MAX_TITLE_LENGTH:
        errors.append(f"Title must be {MAX_TITLE_LENGTH} characters or less")

    if not (text or "").strip():
        errors.append("Text content is required")
    elif len(text) > MAX_TEXT_LENGTH:
        errors.append(f"Text must be {MAX_TEXT_LENGTH} characters or less")

    parsed_date = None
    if not date:
        errors.append("Date is required")
    else:
        parsed_date = _parse_date(date)
        if parsed_date is None:
            errors.append("Invalid date format")

    errors.extend(_tag_problems(parsed_tags))

    if errors:
        logger.warning("journal_validation_failed errors=%s", errors)
        raise ValidationError(body={"errors": errors})

    return JournalDraft(title=title.strip(), text=text.strip(), date=parsed_date, tags=parsed_tags)


def validate_update(payload: schemas.UpdateJournalEntryRequest) -> list[str] | None:
    if not payload.title or not payload.text:
        raise ValidationError("Title and text are required")
    if payload.tags is None:
        return None
    if not isinstance(payload.tags, list):
        raise ValidationError("Invalid tags format")
    problems = _tag_problems(payload.tags)
    if problems:
        raise ValidationError(problems[0])
    return payload.tags


async def create_entry(db: Database, user_id: int, draft: JournalDraft) -> dict:
    row = await repository.create_entry(
        db,
        user_id=user_id,
        title=draft.title,
        text=draft.text,
        entry_date=draft.date,
        tags=draft.tags,
    )
    logger.info("journal_entry_created user_id=%s entry_id=%s", user_id, row["entry_id"])
    return row


async def _check_owner(db: Database, entry_id: int, user_id: int, forbidden_message: str) -> None:
    if await repository.get_entry_owner(db, entry_id) is None:
        raise NotFoundError("Journal entry not found")
    if not await ownership.journal_entry_belongs_to_user(db, entry_id, user_id):
        raise AuthorizationError(forbidden_message)


async def update_entry(
    db: Database,
    user_id: int,
    entry_id: int,
    payload: schemas.UpdateJournalEntryRequest,
) -> dict:
    tags = validate_update(payload)
    await _check_owner(db, entry_id, user_id, "You can only edit your own journal entries")

    row = await repository.update_entry(
        db,
        entry_id=entry_id,
        user_id=user_id,
        title=payload.title,
        text=payload.text,
        tags=tags,
    )
    if row is None:
        raise NotFoundError("Journal entry not found")
    return row


async def delete_entry(db: Database, user_id: int, entry_id: int) -> None:
    async with db.transaction() as conn:
        if await repository.get_entry_owner(conn, entry_id) is None:
            raise NotFoundError("Journal entry not found")
        if not await ownership.journal_entry_belongs_to_user(conn, entry_id, user_id):
            raise AuthorizationError("You can only delete your own journal entries")
        await repository.delete_entry(conn, entry_id)
    logger.info("journal_entry_deleted user_id=%s entry_id=%s", user_id, entry_id)
