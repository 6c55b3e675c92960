from menu_service.menu.base import MenuItemCreate, MenuItemRecord, MenuStore
from menu_service.menu.handlers import add_menu_item, get_menu

__all__ = [
    "MenuItemCreate",
    "MenuItemRecord",
    "MenuStore",
    "add_menu_item",
    "get_menu",
]
