from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from menu_service import main
from menu_service.callable import auth as callable_auth
from menu_service.core.errors import MenuStoreError
from menu_service.menu.base import MenuItemRecord, MenuStore
from menu_service.menu.memory import InMemoryMenuStore

VALID_TOKEN = "valid-id-token"


class FailingMenuStore(MenuStore):
    def __init__(self) -> None:
        self.add_calls = 0

    async def list_items(self) -> list[MenuItemRecord]:
        raise MenuStoreError("list", "store unavailable")

    async def add_item(self, fields: dict[str, Any]) -> str:
        self.add_calls += 1
        raise MenuStoreError("add", "store unavailable")

    async def check(self) -> None:
        raise MenuStoreError("check", "store unavailable")


@pytest.fixture()
def menu_store() -> InMemoryMenuStore:
    return InMemoryMenuStore()


@pytest.fixture()
def failing_store() -> FailingMenuStore:
    return FailingMenuStore()


@pytest.fixture()
def fake_id_tokens(monkeypatch) -> list[str]:
    """Accept ``VALID_TOKEN`` as user ``chef-1`` and reject anything else."""
    seen: list[str] = []

    def fake_verify_id_token(token: str) -> dict[str, Any]:
        seen.append(token)
        if token != VALID_TOKEN:
            raise callable_auth.firebase_auth.InvalidIdTokenError("bad token")
        return {"uid": "chef-1", "email": "chef@example.com"}

    monkeypatch.setattr(callable_auth.firebase_auth, "verify_id_token", fake_verify_id_token)
    return seen


def _client_for(store: MenuStore, **kwargs: Any) -> Iterator[TestClient]:
    main.app.dependency_overrides[main.get_menu_store] = lambda: store
    main.limiter.reset()
    try:
        yield TestClient(main.app, **kwargs)
    finally:
        main.app.dependency_overrides.clear()


@pytest.fixture()
def client(menu_store: InMemoryMenuStore, fake_id_tokens) -> Iterator[TestClient]:
    yield from _client_for(menu_store)


@pytest.fixture()
def failing_client(failing_store: FailingMenuStore, fake_id_tokens) -> Iterator[TestClient]:
    yield from _client_for(failing_store)
