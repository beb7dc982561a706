"""
Forum API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from auth import ownership
from auth.dependencies import get_current_user_id
from core import envelope
from core.db import Database, get_db
from core.errors import AuthorizationError, NotFoundError, ValidationError
from core.params import path_id

from . import repository, schemas

logger = logging.getLogger(__name__)

router = APIRouter()

post_id_param = path_id("post_id", "post ID")
reply_id_param = path_id("reply_id", "reply ID")


async def owned_post(
    post_id: int = Depends(post_id_param),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> int:
    if not await repository.post_exists(db, post_id):
        raise NotFoundError("Post not found")
    if not await ownership.post_belongs_to_user(db, post_id, user_id):
        raise AuthorizationError("Not authorized to modify this post")
    return post_id


async def owned_reply(
    reply_id: int = Depends(reply_id_param),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> int:
    if not await repository.reply_exists(db, reply_id):
        raise NotFoundError("Reply not found")
    if not await ownership.reply_belongs_to_user(db, reply_id, user_id):
        raise AuthorizationError("Not authorized to modify this reply")
    return reply_id


async def post_fields(request: schemas.PostRequest) -> tuple[str, str, str | None]:
    if not request.title or not request.content:
        raise ValidationError("Title and content are required")
    if request.category and request.category not in schemas.CATEGORIES:
        raise ValidationError("Invalid category")
    return request.title, request.content, request.category or None


async def reply_content(request: schemas.ReplyRequest) -> str:
    if not (request.content or "").strip():
        raise ValidationError("Reply content is required")
    return request.content


@router.post("/forum/posts/add", status_code=201)
async def create_post(
    fields: tuple[str, str, str | None] = Depends(post_fields),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    title, content, category = fields
    row = await repository.create_post(
        db, user_id=user_id, title=title, content=content, category=category
    )
    logger.info("post_created user_id=%s post_id=%s", user_id, row["post_id"])
    return envelope.ok(data=row)


@router.get("/forum/posts")
async def list_posts(
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    return envelope.ok(data=await repository.list_posts(db))


@router.get("/forum/posts/{post_id}")
async def get_post(
    post_id: int = Depends(post_id_param),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    row = await repository.get_post(db, post_id=post_id, viewer_id=user_id)
    if row is None:
        raise NotFoundError("Post not found")
    return envelope.ok(data=row)


@router.put("/forum/posts/{post_id}")
async def update_post(
    fields: tuple[str, str, str | None] = Depends(post_fields),
    post_id: int = Depends(owned_post),
    db: Database = Depends(get_db),
) -> dict:
    title, content, category = fields
    row = await repository.update_post(
        db, post_id=post_id, title=title, content=content, category=category
    )
    if row is None:
        raise NotFoundError("Post not found")
    return envelope.ok(data=row)


@router.delete("/forum/posts/{post_id}")
async def delete_post(
    post_id: int = Depends(owned_post),
    db: Database = Depends(get_db),
) -> dict:
    async with db.transaction() as conn:
        reply_count = await repository.delete_post(conn, post_id)
    logger.info("post_deleted post_id=%s replies=%s", post_id, reply_count)
    return envelope.ok(message="Post deleted successfully")


@router.post("/forum/posts/{post_id}/reply", status_code=201)
async def create_reply(
    content: str = Depends(reply_content),
    post_id: int = Depends(post_id_param),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    if not await repository.post_exists(db, post_id):
        raise NotFoundError("Post not found")
    row = await repository.create_reply(db, post_id=post_id, user_id=user_id, content=content)
    logger.info("reply_created post_id=%s reply_id=%s", post_id, row["reply_id"])
    return envelope.ok(data=row)


@router.get("/forum/posts/{post_id}/replies")
async def list_replies(
    post_id: int = Depends(post_id_param),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    if not await repository.post_exists(db, post_id):
        raise NotFoundError("Post not found")
    rows = await repository.list_replies(db, post_id=post_id, viewer_id=user_id)
    return envelope.ok(data=rows)


@router.put("/forum/replies/{reply_id}")
async def update_reply(
    content: str = Depends(reply_content),
    reply_id: int = Depends(owned_reply),
    db: Database = Depends(get_db),
) -> dict:
    row = await repository.update_reply(db, reply_id=reply_id, content=content)
    if row is None:
        raise NotFoundError("Reply not found")
    return envelope.ok(data=row)


@router.delete("/forum/replies/{reply_id}")
async def delete_reply(
    reply_id: int = Depends(owned_reply),
    db: Database = Depends(get_db),
) -> dict:
    if not await repository.delete_reply(db, reply_id):
        raise NotFoundError("Reply not found")
    logger.info("reply_deleted reply_id=%s", reply_id)
    return envelope.ok(message="Reply deleted successfully")
