"""
Wire format of Firebase callable functions.

Requests are ``POST`` with a JSON body ``{"data": ...}``; successful calls
answer ``{"result": ...}`` and protocol failures answer
``{"error": {"status": ..., "message": ...}}``.
"""

from __future__ import annotations

import json
import math
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError

# Canonical callable error codes and the HTTP status each one maps to.
HTTP_STATUS_BY_CODE: dict[str, int] = {
    "ok": 200,
    "cancelled": 499,
    "unknown": 500,
    "invalid-argument": 400,
    "deadline-exceeded": 504,
    "not-found": 404,
    "already-exists": 409,
    "permission-denied": 403,
    "unauthenticated": 401,
    "resource-exhausted": 429,
    "failed-precondition": 400,
    "aborted": 409,
    "out-of-range": 400,
    "unimplemented": 501,
    "internal": 500,
    "unavailable": 503,
    "data-loss": 500,
}


class HttpsError(Exception):
    def __init__(self, code: str, message: str, details: Any | None = None) -> None:
        if code not in HTTP_STATUS_BY_CODE:
            raise ValueError(f"Unknown callable error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_CODE[self.code]

    @property
    def status(self) -> str:
        return self.code.replace("-", "_").upper()

    def to_envelope(self) -> dict[str, Any]:
        error: dict[str, Any] = {"status": self.status, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return {"error": error}


class CallableRequest(BaseModel):
    data: Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-finite number {name} is not valid JSON")


def parse_callable_body(body: bytes) -> CallableRequest:
    """Decode a request body, rejecting anything that is not strict JSON."""
    try:
        decoded = json.loads(body, parse_constant=_reject_constant)
    except ValueError as exc:
        raise HttpsError("invalid-argument", "Bad Request") from exc
    try:
        return CallableRequest.model_validate(decoded)
    except ValidationError as exc:
        raise HttpsError("invalid-argument", "Bad Request") from exc


def _finite_only(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _finite_only(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_finite_only(item) for item in value]
    return value


def result_envelope(result: Any) -> dict[str, Any]:
    # Non-finite floats have no JSON form; they are sent as null.
    return {"result": _finite_only(jsonable_encoder(result))}
