"""
Repository Pattern implementation.
Centralizes data access behind interfaces with one SQLAlchemy adapter each.

Usage:
    from rest_api.repositories import get_menu_repository

    repo = get_menu_repository(db)
    menu = repo.get(menu_id)
    grouped = repo.items_by_section(menu_id)
"""

from .base import BaseRepository, upsert
from .restaurant import RestaurantRepository, SqlRestaurantRepository, get_restaurant_repository
from .menu import MenuRepository, SqlMenuRepository, get_menu_repository
from .item import ItemRepository, SqlItemRepository, get_item_repository
from .translation import (
    TranslationRepository,
    SqlTranslationRepository,
    TranslationTarget,
    TARGETS,
    get_translation_repository,
)

__all__ = [
    # Base
    "BaseRepository",
    "upsert",
    # Restaurant
    "RestaurantRepository",
    "SqlRestaurantRepository",
    "get_restaurant_repository",
    # Menu
    "MenuRepository",
    "SqlMenuRepository",
    "get_menu_repository",
    # Item
    "ItemRepository",
    "SqlItemRepository",
    "get_item_repository",
    # Translation
    "TranslationRepository",
    "SqlTranslationRepository",
    "TranslationTarget",
    "TARGETS",
    "get_translation_repository",
]
