from __future__ import annotations

import anyio

from menu_service.callable.context import AuthContext, CallableContext
from menu_service.menu.handlers import add_menu_item, get_menu
from menu_service.menu.memory import InMemoryMenuStore

ANONYMOUS = CallableContext()
SIGNED_IN = CallableContext(auth=AuthContext(uid="chef-1"))


def test_get_menu_empty_collection(menu_store: InMemoryMenuStore) -> None:
    result = anyio.run(get_menu, None, ANONYMOUS, menu_store)
    assert result == {"menuItems": []}


def test_get_menu_merges_ids_with_fields() -> None:
    store = InMemoryMenuStore(
        [
            {"name": "Soup", "price": 4, "description": "Daily soup"},
            {"name": "Tea", "price": 2.5, "description": "", "vegan": True},
            {"name": "Cake", "price": 5, "description": "Chocolate"},
        ]
    )

    result = anyio.run(get_menu, {}, ANONYMOUS, store)

    items = result["menuItems"]
    assert len(items) == 3
    assert [item["name"] for item in items] == ["Soup", "Tea", "Cake"]
    assert all(isinstance(item["id"], str) and len(item["id"]) == 20 for item in items)
    assert len({item["id"] for item in items}) == 3
    assert items[1]["vegan"] is True


def test_get_menu_stored_id_field_wins() -> None:
    store = InMemoryMenuStore([{"id": "legacy-7", "name": "Soup", "price": 4}])
    result = anyio.run(get_menu, None, ANONYMOUS, store)
    assert result["menuItems"][0]["id"] == "legacy-7"


def test_get_menu_store_failure_returns_error(failing_store) -> None:
    result = anyio.run(get_menu, None, ANONYMOUS, failing_store)
    assert result == {"error": "Failed to fetch menu items."}


def test_add_menu_item_requires_auth(menu_store: InMemoryMenuStore) -> None:
    for payload in ({"name": "Burger", "price": 9.5}, {}, None):
        result = anyio.run(add_menu_item, payload, ANONYMOUS, menu_store)
        assert result == {"error": "You must be authenticated to add items."}
    assert len(menu_store) == 0


def test_add_menu_item_defaults_description(menu_store: InMemoryMenuStore) -> None:
    result = anyio.run(add_menu_item, {"name": "Burger", "price": 9.5}, SIGNED_IN, menu_store)

    assert result["message"] == "Item added successfully"
    assert isinstance(result["id"], str) and result["id"]

    listing = anyio.run(get_menu, None, ANONYMOUS, menu_store)
    assert listing == {
        "menuItems": [
            {"id": result["id"], "name": "Burger", "price": 9.5, "description": ""}
        ]
    }


def test_add_menu_item_keeps_explicit_description(menu_store: InMemoryMenuStore) -> None:
    payload = {"name": "Fries", "price": 3, "description": "  Crispy, salted  "}
    result = anyio.run(add_menu_item, payload, SIGNED_IN, menu_store)

    listing = anyio.run(get_menu, None, ANONYMOUS, menu_store)
    item = listing["menuItems"][0]
    assert item["id"] == result["id"]
    assert item["description"] == "  Crispy, salted  "


def test_add_menu_item_blank_description_values_default(menu_store: InMemoryMenuStore) -> None:
    for description in (None, "", 0, False):
        payload = {"name": "Water", "price": 1, "description": description}
        anyio.run(add_menu_item, payload, SIGNED_IN, menu_store)

    listing = anyio.run(get_menu, None, ANONYMOUS, menu_store)
    assert [item["description"] for item in listing["menuItems"]] == ["", "", "", ""]


def test_add_menu_item_writes_only_known_fields(menu_store: InMemoryMenuStore) -> None:
    payload = {"name": "Pie", "price": "6", "description": "Apple", "secret": "x"}
    anyio.run(add_menu_item, payload, SIGNED_IN, menu_store)

    item = anyio.run(get_menu, None, ANONYMOUS, menu_store)["menuItems"][0]
    assert set(item) == {"id", "name", "price", "description"}
    # Values are stored as given.
    assert item["price"] == "6"


def test_add_menu_item_missing_fields_is_a_failure(menu_store: InMemoryMenuStore) -> None:
    for payload in ({"price": 2}, {"name": "Bread"}, None, ["Bread", 2]):
        result = anyio.run(add_menu_item, payload, SIGNED_IN, menu_store)
        assert result == {"error": "Failed to add menu item."}
    assert len(menu_store) == 0


def test_add_menu_item_store_failure_returns_error(failing_store) -> None:
    result = anyio.run(add_menu_item, {"name": "Burger", "price": 9.5}, SIGNED_IN, failing_store)
    assert result == {"error": "Failed to add menu item."}
    assert failing_store.add_calls == 1
