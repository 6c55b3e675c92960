from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AuthContext(BaseModel):
    uid: str
    token: dict[str, Any] = Field(default_factory=dict)


class CallableContext(BaseModel):
    auth: AuthContext | None = None
    request_id: str | None = None
