"""
Response envelopes.

Two shapes exist and existing clients pin them per endpoint group:

- standard: success `{"status": "ok", **payload}`,
  error `{"status": "error", "error": {"code": <int>, "message": <str>}}`
- bare (journal): error `{"error": {"message": <str>}}`; success bodies are
  shaped by the handler itself.

A router opts into the bare error shape with
`APIRouter(dependencies=[Depends(envelope.bare_errors)])`.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request

STANDARD = "standard"
BARE = "bare"


def ok(**payload: Any) -> dict[str, Any]:
    return {"status": "ok", **payload}


def success(**payload: Any) -> dict[str, Any]:
    return {"status": "success", **payload}


def error(code: int, message: str) -> dict[str, Any]:
    return {"status": "error", "error": {"code": code, "message": message}}


def bare_error(message: str) -> dict[str, Any]:
    return {"error": {"message": message}}


async def bare_errors(request: Request) -> None:
    request.state.error_envelope = BARE


def error_body(request: Request, code: int, message: str) -> dict[str, Any]:
    if getattr(request.state, "error_envelope", STANDARD) == BARE:
        return bare_error(message)
    return error(code, message)
