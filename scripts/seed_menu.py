from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import anyio
import structlog

from menu_service.core.config import settings
from menu_service.core.logging import configure_logging
from menu_service.main import build_menu_store
from menu_service.menu import MenuItemCreate, MenuStore

DEFAULT_MENU_PATH = Path("data/menu.json")

logger = structlog.get_logger(__name__)


def _load_menu(path: Path) -> list[MenuItemCreate]:
    data = json.loads(path.read_text(encoding="utf-8"))
    return [MenuItemCreate.model_validate(item) for item in data]


async def seed_menu(store: MenuStore, items: list[MenuItemCreate]) -> list[str]:
    ids: list[str] = []
    for item in items:
        fields: dict[str, Any] = item.model_dump()
        ids.append(await store.add_item(fields))
    return ids


async def main(menu_path: Path = DEFAULT_MENU_PATH) -> None:
    configure_logging(settings.log_level)
    items = _load_menu(menu_path)
    store = build_menu_store()
    ids = await seed_menu(store, items)
    logger.info("menu_seeded", count=len(ids), collection=settings.menu_collection)


if __name__ == "__main__":
    anyio.run(main)
