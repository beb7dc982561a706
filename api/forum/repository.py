"""
Forum persistence: posts and their replies.

Author names are rendered as "First L.".
"""

from __future__ import annotations

from core.db import Queryable

_DISPLAY_NAME = "CONCAT(u.first_name, ' ', LEFT(u.last_name, 1), '.')"

_POST_COLUMNS = "post_id, user_id, title, content, category, created_at, updated_at"
_REPLY_COLUMNS = "reply_id, post_id, user_id, content, created_at, updated_at"


async def create_post(
    db: Queryable,
    *,
    user_id: int,
    title: str,
    content: str,
    category: str | None,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO forumpost (user_id, title, content, category)
        VALUES ($1, $2, $3, $4)
        RETURNING {_POST_COLUMNS}
        """,
        user_id,
        title,
        content,
        category,
    )
    if row is None:
        raise RuntimeError("Failed to create post.")
    return row


async def list_posts(db: Queryable) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT p.post_id,
               p.user_id,
               {_DISPLAY_NAME} AS display_name,
               p.title,
               p.content,
               p.category,
               p.created_at,
               p.updated_at,
               COUNT(r.reply_id) AS reply_count,
               COALESCE(
                   json_agg(
                       json_build_object(
                           'reply_id', r.reply_id,
                           'user_id', r.user_id,
                           'author', CONCAT(ru.first_name, ' ', LEFT(ru.last_name, 1), '.'),
                           'content', r.content,
                           'created_at', r.created_at,
                           'updated_at', r.updated_at
                       ) ORDER BY r.created_at ASC
                   ) FILTER (WHERE r.reply_id IS NOT NULL),
                   '[]'
               ) AS replies
        FROM forumpost p
        LEFT JOIN users u ON u.user_id = p.user_id
        LEFT JOIN forumreply r ON r.post_id = p.post_id
        LEFT JOIN users ru ON ru.user_id = r.user_id
        GROUP BY p.post_id, u.first_name, u.last_name
        ORDER BY p.created_at DESC
        """
    )


async def get_post(db: Queryable, *, post_id: int, viewer_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT p.post_id,
               p.user_id,
               p.title,
               p.content,
               p.category,
               p.created_at,
               p.updated_at,
               {_DISPLAY_NAME} AS display_name,
               (p.user_id = $2) AS is_owner,
               COUNT(r.reply_id) AS reply_count,
               COALESCE(
                   json_agg(
                       json_build_object(
                           'reply_id', r.reply_id,
                           'user_id', r.user_id,
                           'author', CONCAT(ru.first_name, ' ', LEFT(ru.last_name, 1), '.'),
                           'content', r.content,
                           'created_at', r.created_at,
                           'updated_at', r.updated_at,
                           'is_owner', (r.user_id = $2)
                       ) ORDER BY r.created_at ASC
                   ) FILTER (WHERE r.reply_id IS NOT NULL),
                   '[]'
               ) AS replies
        FROM forumpost p
        LEFT JOIN users u ON u.user_id = p.user_id
        LEFT JOIN forumreply r ON r.post_id = p.post_id
        LEFT JOIN users ru ON ru.user_id = r.user_id
        WHERE p.post_id = $1
        GROUP BY p.post_id, u.first_name, u.last_name
        """,
        post_id,
        viewer_id,
    )


async def post_exists(db: Queryable, post_id: int) -> bool:
    row = await db.fetch_one("SELECT post_id FROM forumpost WHERE post_id = $1", post_id)
    return row is not None


async def update_post(
    db: Queryable,
    *,
    post_id: int,
    title: str,
    content: str,
    category: str | None,
) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE forumpost
        SET title = $1,
            content = $2,
            category = $3,
            updated_at = CURRENT_TIMESTAMP
        WHERE post_id = $4
        RETURNING {_POST_COLUMNS}
        """,
        title,
        content,
        category,
        post_id,
    )


async def delete_post(db: Queryable, post_id: int) -> int:
    """
    Delete a post and its replies; returns the number of replies removed.
    """
    replies = await db.fetch_all(
        "DELETE FROM forumreply WHERE post_id = $1 RETURNING reply_id",
        post_id,
    )
    await db.execute("DELETE FROM forumpost WHERE post_id = $1", post_id)
    return len(replies)


async def create_reply(db: Queryable, *, post_id: int, user_id: int, content: str) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO forumreply (user_id, post_id, content)
        VALUES ($1, $2, $3)
        RETURNING {_REPLY_COLUMNS}
        """,
        user_id,
        post_id,
        content,
    )
    if row is None:
        raise RuntimeError("Failed to create reply.")
    return row


async def list_replies(db: Queryable, *, post_id: int, viewer_id: int) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT r.reply_id,
               r.user_id,
               r.content,
               r.created_at,
               r.updated_at,
               {_DISPLAY_NAME} AS author,
               (r.user_id = $2) AS is_owner
        FROM forumreply r
        LEFT JOIN users u ON u.user_id = r.user_id
        WHERE r.post_id = $1
        ORDER BY r.created_at ASC
        """,
        post_id,
        viewer_id,
    )


async def reply_exists(db: Queryable, reply_id: int) -> bool:
    row = await db.fetch_one("SELECT reply_id FROM forumreply WHERE reply_id = $1", reply_id)
    return row is not None


async def update_reply(db: Queryable, *, reply_id: int, content: str) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE forumreply
        SET content = $1,
            updated_at = CURRENT_TIMESTAMP
        WHERE reply_id = $2
        RETURNING {_REPLY_COLUMNS}
        """,
        content,
        reply_id,
    )


async def delete_reply(db: Queryable, reply_id: int) -> bool:
    row = await db.fetch_one(
        "DELETE FROM forumreply WHERE reply_id = $1 RETURNING reply_id",
        reply_id,
    )
    return row is not None
