"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class and TimestampMixin
- user: User (restaurant owner)
- restaurant: Restaurant, RestaurantTranslation, RestaurantSocial, RestaurantMenu
- menu: Menu, MenuSection, MenuSectionTranslation
- item: MenuItem, MenuItemTranslation, ItemIngredient(+Translation),
  ItemAllergen(+Translation), ItemDietaryTag, DietaryTagTranslation
"""

# Base classes
from .base import Base, TimestampMixin

# Owners
from .user import User

# Restaurants
from .restaurant import Restaurant, RestaurantTranslation, RestaurantSocial, RestaurantMenu

# Menus and sections
from .menu import Menu, MenuSection, MenuSectionTranslation

# Items and their relations
from .item import (
    MenuItem,
    MenuItemTranslation,
    ItemIngredient,
    ItemIngredientTranslation,
    ItemAllergen,
    ItemAllergenTranslation,
    ItemDietaryTag,
    DietaryTagTranslation,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "Restaurant",
    "RestaurantTranslation",
    "RestaurantSocial",
    "RestaurantMenu",
    "Menu",
    "MenuSection",
    "MenuSectionTranslation",
    "MenuItem",
    "MenuItemTranslation",
    "ItemIngredient",
    "ItemIngredientTranslation",
    "ItemAllergen",
    "ItemAllergenTranslation",
    "ItemDietaryTag",
    "DietaryTagTranslation",
]
