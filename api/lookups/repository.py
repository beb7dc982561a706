"""
Lookup persistence: coupons, quiz questions, curated tips and tip settings.
"""

from __future__ import annotations

from core.db import Queryable

QUIZ_SIZE = 5


async def list_coupons(db: Queryable) -> list[dict]:
    return await db.fetch_all("SELECT * FROM coupons ORDER BY coupon_id")


async def random_quiz(db: Queryable, category: str | None) -> list[dict]:
    """
    Draw `QUIZ_SIZE` random questions, optionally from one category.
    """
    return await db.fetch_all(
        """
        SELECT question_id,
               category,
               question_text,
               option_a,
               option_b,
               option_c,
               option_d,
               correct_option
        FROM quizquestions
        WHERE $1::text IS NULL OR category = $1
        ORDER BY random()
        LIMIT $2
        """,
        category,
        QUIZ_SIZE,
    )


async def list_tips(db: Queryable) -> list[dict]:
    return await db.fetch_all("SELECT * FROM curatedtips ORDER BY tip_id")


async def tips_for(db: Queryable, *, age_months: int, gender: str | None) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT *
        FROM curatedtips
        WHERE $1 BETWEEN min_age AND max_age
          AND (target_gender = $2 OR target_gender = 'All')
        ORDER BY tip_id
        """,
        age_months,
        gender,
    )


async def get_notification_settings(db: Queryable, user_id: int) -> dict | None:
    return await db.fetch_one(
        "SELECT * FROM tipsnotificationsettings WHERE user_id = $1",
        user_id,
    )


async def create_notification_settings(
    db: Queryable,
    *,
    user_id: int,
    notification_frequency: str = "Daily",
    opt_in: bool = True,
) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO tipsnotificationsettings (user_id, notification_frequency, opt_in)
        VALUES ($1, $2, $3)
        RETURNING *
        """,
        user_id,
        notification_frequency,
        opt_in,
    )
    if row is None:
        raise RuntimeError("Failed to create notification settings.")
    return row


async def update_notification_settings(
    db: Queryable,
    *,
    user_id: int,
    notification_frequency: str,
    opt_in: bool,
) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE tipsnotificationsettings
        SET notification_frequency = $1,
            opt_in = $2,
            updated_at = CURRENT_TIMESTAMP
        WHERE user_id = $3
        RETURNING *
        """,
        notification_frequency,
        opt_in,
        user_id,
    )
