"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Awaitable, Callable

from fastapi import Depends, Header

from core.db import Database, get_db
from core.errors import ApiError, AuthenticationError, AuthorizationError, NotFoundError
from core.params import path_id

from . import ownership, service


def require_user(
    *,
    missing_user: type[ApiError] = NotFoundError,
    missing_user_message: str = "User not found",
) -> Callable[..., Awaitable[int]]:
    """
    Build a dependency that resolves the caller's `user_id` on every request.

    Missing header -> 401; unusable token -> 401; token whose email matches no
    user -> `missing_user` (404 by default).
    """

    async def dependency(
        authorization: str | None = Header(default=None),
        db: Database = Depends(get_db),
    ) -> int:
        if not (authorization or "").strip():
            raise AuthenticationError("No authorization token provided")

        if service.email_from_authorization(authorization) is None:
            raise AuthenticationError("Invalid token format")

        user_id = await service.resolve_user_id(db, authorization)
        if user_id is None:
            raise missing_user(missing_user_message)
        return user_id

    return dependency


get_current_user_id = require_user()


@dataclass(frozen=True)
class BabyAccess:
    baby_id: int
    user_id: int


@functools.lru_cache(maxsize=None)
def owned_baby(
    param: str = "babyId",
    label: str | None = None,
    forbidden_message: str = "Forbidden",
) -> Callable[..., Awaitable[BabyAccess]]:
    """
    Dependency for baby-scoped routes: parse the baby id, resolve the caller,
    then check `user_baby`. Steps run in that order so a malformed id is a 400
    before any database call and a foreign baby is a 403.
    """

    async def dependency(
        baby_id: int = Depends(path_id(param, label)),
        user_id: int = Depends(get_current_user_id),
        db: Database = Depends(get_db),
    ) -> BabyAccess:
        if not await ownership.baby_belongs_to_user(db, baby_id, user_id):
            raise AuthorizationError(forbidden_message)
        return BabyAccess(baby_id=baby_id, user_id=user_id)

    return dependency


@functools.lru_cache(maxsize=None)
def path_self(
    param: str,
    label: str | None = None,
    forbidden_message: str = "Forbidden",
) -> Callable[..., Awaitable[int]]:
    """
    Dependency for routes keyed by a user id in the path (`/user/{id}`,
    `/doctor/{doctorId}/...`): the caller may only act as themselves.
    """

    async def dependency(
        path_user_id: int = Depends(path_id(param, label)),
        user_id: int = Depends(get_current_user_id),
    ) -> int:
        if path_user_id != user_id:
            raise AuthorizationError(forbidden_message)
        return user_id

    return dependency
