"""
Medical professional, doctor-baby link and health record persistence.
"""

from __future__ import annotations

from core.db import Queryable

DOCTOR_ROLE = "Medical Professional"


async def list_medical_professionals(db: Queryable) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT user_id, first_name, last_name, email, role, profile_picture_url, created_at
        FROM users
        WHERE role = $1
        ORDER BY last_name, first_name, user_id
        """,
        DOCTOR_ROLE,
    )


async def is_medical_professional(db: Queryable, user_id: int) -> bool:
    row = await db.fetch_one(
        "SELECT user_id FROM users WHERE user_id = $1 AND role = $2",
        user_id,
        DOCTOR_ROLE,
    )
    return row is not None


async def connect_doctor_and_baby(db: Queryable, *, doctor_id: int, baby_id: int) -> dict:
    row = await db.fetch_one(
        "INSERT INTO doctor_baby (doctor_id, baby_id) VALUES ($1, $2) RETURNING *",
        doctor_id,
        baby_id,
    )
    if row is None:
        raise RuntimeError("Failed to connect doctor to baby.")
    return row


async def list_doctor_babies_with_parents(db: Queryable, doctor_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT b.baby_id,
               b.first_name AS baby_first_name,
               b.last_name AS baby_last_name,
               b.gender,
               b.weight,
               b.height,
               TO_CHAR(b.birthdate, 'YYYY-MM-DD') AS birthdate,
               u.user_id AS parent_id,
               u.first_name AS parent_first_name,
               u.last_name AS parent_last_name
        FROM baby b
        JOIN user_baby ub ON ub.baby_id = b.baby_id
        JOIN users u ON u.user_id = ub.user_id
        JOIN doctor_baby db ON db.baby_id = b.baby_id
        WHERE db.doctor_id = $1
        ORDER BY u.user_id, b.baby_id
        """,
        doctor_id,
    )


async def list_parent_babies_assigned_to(db: Queryable, *, doctor_id: int, parent_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT b.baby_id,
               b.first_name,
               b.last_name,
               b.gender,
               b.weight,
               b.height,
               TO_CHAR(b.birthdate, 'YYYY-MM-DD') AS birthdate
        FROM baby b
        JOIN doctor_baby db ON db.baby_id = b.baby_id
        JOIN user_baby ub ON ub.baby_id = b.baby_id
        WHERE db.doctor_id = $1
          AND ub.user_id = $2
        ORDER BY b.baby_id
        """,
        doctor_id,
        parent_id,
    )


async def list_assigned_baby_ids(db: Queryable, doctor_id: int) -> list[int]:
    rows = await db.fetch_all("SELECT baby_id FROM doctor_baby WHERE doctor_id = $1", doctor_id)
    return [int(row["baby_id"]) for row in rows]


async def list_health_records(db: Queryable, baby_ids: list[int]) -> list[dict]:
    """
    Health records of the given babies, each carrying the baby's name.
    """
    return await db.fetch_all(
        """
        SELECT h.*,
               b.first_name,
               b.last_name
        FROM healthrecord h
        JOIN baby b ON b.baby_id = h.baby_id
        WHERE h.baby_id = ANY($1::int[])
        ORDER BY h.baby_id, h.health_record_id
        """,
        baby_ids,
    )
