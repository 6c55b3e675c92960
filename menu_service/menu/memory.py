from __future__ import annotations

import copy
import secrets
import string
from typing import Any

from menu_service.menu.base import MenuItemRecord, MenuStore

AUTO_ID_ALPHABET = string.ascii_letters + string.digits
AUTO_ID_LENGTH = 20


def generate_auto_id() -> str:
    return "".join(secrets.choice(AUTO_ID_ALPHABET) for _ in range(AUTO_ID_LENGTH))


class InMemoryMenuStore(MenuStore):
    """Process-local menu collection for local runs and tests."""

    def __init__(self, items: list[dict[str, Any]] | None = None) -> None:
        self._documents: dict[str, dict[str, Any]] = {}
        for item in items or []:
            self._documents[generate_auto_id()] = copy.deepcopy(item)

    async def list_items(self) -> list[MenuItemRecord]:
        return [
            MenuItemRecord(id=doc_id, fields=copy.deepcopy(fields))
            for doc_id, fields in self._documents.items()
        ]

    async def add_item(self, fields: dict[str, Any]) -> str:
        doc_id = generate_auto_id()
        while doc_id in self._documents:
            doc_id = generate_auto_id()
        self._documents[doc_id] = copy.deepcopy(fields)
        return doc_id

    async def check(self) -> None:
        return None

    def __len__(self) -> int:
        return len(self._documents)
