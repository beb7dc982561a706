"""
Auth security helpers.
"""

from __future__ import annotations

import os
import re
import time
from typing import Any

import bcrypt
import jwt


class AuthSecurityError(RuntimeError):
    pass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return os.environ.get("JWT_SECRET", "dev-change-this-secret").strip() or "dev-change-this-secret"


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALG", "HS256").strip() or "HS256"


def access_token_expire_minutes() -> int:
    return _env_int("ACCESS_TOKEN_EXPIRE_MIN", 60)


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").strip().encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


_PASSWORD_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"[A-Z]"), "Password should contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password should contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password should contain at least one number"),
    (re.compile(r"[!@#$%^&*(),.?\":{}|<>]"), "Password should contain at least one special character"),
]

PASSWORD_MIN_LENGTH = 8


def password_problem(password: str) -> str | None:
    """
    Return the first password-policy violation, or None if the password is acceptable.
    """
    password = password or ""
    if len(password) < PASSWORD_MIN_LENGTH:
        return f"Password should be at least {PASSWORD_MIN_LENGTH} characters long"
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(password):
            return message
    return None


def build_access_token(
    *,
    user_id: int,
    email: str,
    first_name: str | None = None,
    last_name: str | None = None,
    role: str | None = None,
) -> str:
    issued_at = now_epoch_s()
    expires_at = issued_at + (access_token_expire_minutes() * 60)

    payload = {
        "userId": user_id,
        "firstName": first_name,
        "lastName": last_name,
        "email": email,
        "role": role,
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry, then require an `email` claim.
    """
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    email = str(payload.get("email") or "").strip()
    if not email:
        raise AuthSecurityError("Access token has no email claim.")
    payload["email"] = email
    return payload
