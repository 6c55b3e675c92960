from __future__ import annotations

from typing import Any

import structlog

from menu_service.callable.context import CallableContext
from menu_service.menu.base import MenuItemCreate, MenuStore

logger = structlog.get_logger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch menu items."
ADD_FAILED_MESSAGE = "Failed to add menu item."
AUTH_REQUIRED_MESSAGE = "You must be authenticated to add items."
ADD_SUCCEEDED_MESSAGE = "Item added successfully"


async def get_menu(data: Any, context: CallableContext, store: MenuStore) -> dict[str, Any]:
    _ = data, context
    try:
        records = await store.list_items()
    except Exception:  # noqa: BLE001 - every failure becomes the same result
        logger.exception("menu_fetch_failed")
        return {"error": FETCH_FAILED_MESSAGE}
    return {"menuItems": [record.to_payload() for record in records]}


async def add_menu_item(
    data: Any, context: CallableContext, store: MenuStore
) -> dict[str, Any]:
    if context.auth is None:
        logger.info("menu_item_add_unauthenticated")
        return {"error": AUTH_REQUIRED_MESSAGE}

    try:
        item = MenuItemCreate.model_validate(data)
        doc_id = await store.add_item(item.model_dump())
    except Exception:  # noqa: BLE001 - every failure becomes the same result
        logger.exception("menu_item_add_failed", uid=context.auth.uid)
        return {"error": ADD_FAILED_MESSAGE}

    logger.info("menu_item_added", item_id=doc_id, uid=context.auth.uid)
    return {"message": ADD_SUCCEEDED_MESSAGE, "id": doc_id}
