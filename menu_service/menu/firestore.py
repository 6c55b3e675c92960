from __future__ import annotations

from typing import Any

import firebase_admin
from firebase_admin import firestore_async
from google.api_core import exceptions as google_exceptions

from menu_service.core.config import settings
from menu_service.core.errors import MenuStoreError
from menu_service.menu.base import MenuItemRecord, MenuStore


class FirestoreMenuStore(MenuStore):
    def __init__(
        self,
        app: firebase_admin.App | None = None,
        collection: str | None = None,
        client: Any | None = None,
    ) -> None:
        self.collection = collection or settings.menu_collection
        self._client = client if client is not None else firestore_async.client(app)

    async def list_items(self) -> list[MenuItemRecord]:
        try:
            snapshots = await self._client.collection(self.collection).get()
        except google_exceptions.GoogleAPIError as exc:
            raise MenuStoreError("list", f"Listing {self.collection} failed: {exc}") from exc
        return [
            MenuItemRecord(id=snapshot.id, fields=snapshot.to_dict() or {})
            for snapshot in snapshots
        ]

    async def add_item(self, fields: dict[str, Any]) -> str:
        try:
            _, doc_ref = await self._client.collection(self.collection).add(fields)
        except google_exceptions.GoogleAPIError as exc:
            raise MenuStoreError("add", f"Adding to {self.collection} failed: {exc}") from exc
        return doc_ref.id

    async def check(self) -> None:
        await self._client.collection(self.collection).limit(1).get()
