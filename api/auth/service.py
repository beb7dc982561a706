"""
Auth business logic: token identity resolution, login and signup.
"""

from __future__ import annotations

import logging

import asyncpg

from core.db import Database, Queryable
from core.errors import AuthenticationError, ConflictError, ValidationError

from . import repository, schemas, security

logger = logging.getLogger(__name__)


def email_from_authorization(authorization: str | None) -> str | None:
    """
    Extract the verified `email` claim from a `Bearer <token>` header value.

    Returns None when the header or token is missing, the signature/expiry
    check fails, or the payload has no email.
    """
    parts = (authorization or "").split()
    if len(parts) < 2:
        return None

    try:
        payload = security.decode_access_token(parts[1])
    except security.AuthSecurityError as exc:
        logger.warning("token_rejected reason=%s", exc)
        return None
    return str(payload["email"])


async def resolve_user_id(db: Queryable, authorization: str | None) -> int | None:
    """
    Map an Authorization header to a `users.user_id`.

    Never raises for "not found" conditions (returns None); database errors
    propagate to the caller.
    """
    email = email_from_authorization(authorization)
    if email is None:
        return None

    user_id = await repository.get_user_id_by_email(db, email)
    if user_id is None:
        logger.warning("user_not_found_for_token")
    return user_id


async def login(db: Database, payload: schemas.LoginRequest) -> dict:
    credentials = await repository.get_credentials_by_email(db, payload.email)
    if credentials is None:
        raise AuthenticationError("User doesn't exist")

    if not security.verify_password(payload.password, str(credentials.get("password") or "")):
        raise AuthenticationError("Invalid credentials")

    user_row = await repository.get_user_by_email(db, payload.email)
    if user_row is None:
        raise AuthenticationError("User doesn't exist")

    token = security.build_access_token(
        user_id=int(user_row["user_id"]),
        email=str(user_row["email"]),
        first_name=user_row.get("first_name"),
        last_name=user_row.get("last_name"),
        role=user_row.get("role"),
    )
    logger.info("login_succeeded user_id=%s", user_row["user_id"])
    return {
        "success": True,
        "token": token,
        "userId": int(user_row["user_id"]),
        "userRole": user_row.get("role"),
        "message": "Login successfully",
    }


async def signup(db: Database, payload: schemas.SignupRequest) -> dict:
    problem = security.password_problem(payload.password)
    if problem is not None:
        raise ValidationError(problem)

    existing = await repository.get_user_by_email(db, payload.email)
    if existing is not None:
        raise ConflictError("Email is already registered")

    password_hash = security.hash_password(payload.password)
    try:
        async with db.transaction() as conn:
            user_row = await repository.create_user(
                conn,
                first_name=payload.first_name.strip(),
                last_name=payload.last_name.strip(),
                email=payload.email,
                role=payload.role.strip() or "Parent",
            )
            await repository.create_credentials(conn, email=payload.email, password_hash=password_hash)
    except asyncpg.UniqueViolationError as exc:
        # Lost a race with a concurrent signup for the same email.
        raise ConflictError("Email is already registered") from exc

    logger.info("signup_succeeded user_id=%s", user_row["user_id"])
    return user_row
