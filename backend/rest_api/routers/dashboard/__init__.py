"""
Owner dashboard API router - combines all dashboard sub-routers.

- restaurants: Restaurant CRUD, image, translations, socials, attached menus
- menus: Menu CRUD, duplication, grouped items, translation status, sections
- sections: Section update/delete/translations and their items
- items: Item CRUD, ingredients, allergens, dietary tags, translations, image
- presets: Section presets per restaurant type

All routes are prefixed with /api
"""

from fastapi import APIRouter

from .restaurants import router as restaurants_router
from .menus import router as menus_router
from .sections import router as sections_router
from .items import router as items_router
from .presets import router as presets_router


router = APIRouter(prefix="/api")

router.include_router(restaurants_router)
router.include_router(menus_router)
router.include_router(sections_router)
router.include_router(items_router)
router.include_router(presets_router)

__all__ = ["router"]
