from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _is_blank(value: Any) -> bool:
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


class MenuItemCreate(BaseModel):
    """Normalized record written by ``addMenuItem``.

    ``name`` and ``price`` must be present but are stored as given.
    """

    model_config = ConfigDict(extra="ignore")

    name: Any
    price: Any
    description: Any = ""

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, value: Any) -> Any:
        return "" if _is_blank(value) else value


class MenuItemRecord(BaseModel):
    id: str
    fields: dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        # Stored fields win over the document id, including a stored "id".
        return {"id": self.id, **self.fields}


class MenuStore(ABC):
    @abstractmethod
    async def list_items(self) -> list[MenuItemRecord]:
        raise NotImplementedError

    @abstractmethod
    async def add_item(self, fields: dict[str, Any]) -> str:
        raise NotImplementedError

    @abstractmethod
    async def check(self) -> None:
        raise NotImplementedError
