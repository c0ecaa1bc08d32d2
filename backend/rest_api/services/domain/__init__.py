"""
Domain Services - Clean Architecture Application Layer.

CLEAN-ARCH: Services contain business logic and orchestrate operations.
They use Repositories for data access.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import MenuService

    # In router
    service = MenuService(db)
    menus = service.list_own(user_id)
"""

from .restaurant_service import RestaurantService
from .menu_service import MenuService
from .item_service import ItemService, normalize_item_fields, validate_item_codes
from .public_menu_service import PublicMenuService
from .section_presets import SECTION_PRESETS, SectionPreset, get_section_presets

__all__ = [
    "RestaurantService",
    "MenuService",
    "ItemService",
    "PublicMenuService",
    "normalize_item_fields",
    "validate_item_codes",
    "SECTION_PRESETS",
    "SectionPreset",
    "get_section_presets",
]
