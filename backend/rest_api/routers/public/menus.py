"""
Public menu endpoint - no authentication.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.config.constants import Languages
from shared.infrastructure.db import get_db
from shared.utils.dashboard_schemas import PublicMenu
from rest_api.services.domain import PublicMenuService


router = APIRouter(prefix="/api/public", tags=["public"])


@router.get("/menus/{menu_id}", response_model=PublicMenu)
def get_public_menu(
    menu_id: str,
    lang: str = Query(default=Languages.SOURCE, max_length=5),
    db: Session = Depends(get_db),
) -> PublicMenu:
    """
    Active menu with its visible sections and items in one language.

    Each text field says whether it is a stored translation or the
    Italian default.
    """
    return PublicMenuService(db).render(menu_id, lang)
