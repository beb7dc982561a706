"""
Path/body parameter parsing shared by the feature routers.
"""

from __future__ import annotations

import functools
import re
from typing import Any, Awaitable, Callable

from fastapi import Request

from .errors import ValidationError

_ID_RE = re.compile(r"^\d+$")


def is_valid_id(raw: Any) -> bool:
    text = str(raw if raw is not None else "").strip()
    return bool(_ID_RE.match(text)) and int(text) >= 1


def parse_id(raw: Any, label: str, message: str | None = None) -> int:
    """
    Parse a numeric id: digits only and >= 1, else 400 "Invalid <label> format"
    (or `message` when given).
    """
    if not is_valid_id(raw):
        raise ValidationError(message or f"Invalid {label} format")
    return int(str(raw).strip())


@functools.lru_cache(maxsize=None)
def path_id(
    name: str,
    label: str | None = None,
    message: str | None = None,
) -> Callable[[Request], Awaitable[int]]:
    """
    Dependency that parses path parameter `name` as an id.

    Declare it before the auth dependency in a route signature so malformed ids
    are rejected before any database call. Cached so repeated declarations
    resolve to one dependency per request.
    """

    async def dependency(request: Request) -> int:
        return parse_id(request.path_params.get(name), label or name, message)

    return dependency


def missing_fields(body: dict[str, Any], required: list[str]) -> list[str]:
    return [field for field in required if body.get(field) in (None, "")]


def require_fields(body: dict[str, Any], required: list[str]) -> None:
    missing = missing_fields(body, required)
    if missing:
        raise ValidationError(f"Missing required parameters: {', '.join(missing)}")


def query_flag(raw: str | None) -> bool:
    """
    Query-string boolean where an absent value means true.
    """
    if raw is None:
        return True
    return raw.strip().lower() != "false"
