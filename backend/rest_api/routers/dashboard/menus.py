"""
Menu and section-order endpoints.
"""

from shared.utils.dashboard_schemas import (
    DuplicateRequest,
    ItemOutput,
    MenuCreate,
    MenuDetailOutput,
    MenuItemsGroupedOutput,
    MenuOutput,
    MenuTranslationStatusOutput,
    MenuUpdate,
    SectionCreate,
    SectionOutput,
    SectionReorderRequest,
)
from rest_api.services.domain import MenuService
from ._base import APIRouter, Depends, Session, current_user, get_db, get_user_id, status


router = APIRouter(prefix="/menus", tags=["menus"])


@router.get("", response_model=list[MenuOutput])
def list_menus(
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> list[MenuOutput]:
    menus = MenuService(db).list_own(get_user_id(user))
    return [MenuOutput.model_validate(m) for m in menus]


@router.post("", response_model=MenuDetailOutput, status_code=status.HTTP_201_CREATED)
def create_menu(
    body: MenuCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> MenuDetailOutput:
    """
    Create a menu.

    With use_presets the menu starts with the preset sections of
    preset_type; with restaurant_id it is attached to that restaurant.
    """
    menu = MenuService(db).create(body.model_dump(), get_user_id(user))
    return MenuDetailOutput.model_validate(menu)


@router.get("/{menu_id}", response_model=MenuDetailOutput)
def get_menu(
    menu_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> MenuDetailOutput:
    menu = MenuService(db).get_owned(menu_id, get_user_id(user))
    return MenuDetailOutput.model_validate(menu)


@router.patch("/{menu_id}", response_model=MenuDetailOutput)
def update_menu(
    menu_id: str,
    body: MenuUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> MenuDetailOutput:
    menu = MenuService(db).update(menu_id, body.model_dump(exclude_unset=True), get_user_id(user))
    return MenuDetailOutput.model_validate(menu)


@router.delete("/{menu_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu(
    menu_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> None:
    """Delete a menu with its sections, items and translations."""
    MenuService(db).delete(menu_id, get_user_id(user))


@router.post("/{menu_id}/duplicate", response_model=MenuDetailOutput, status_code=status.HTTP_201_CREATED)
def duplicate_menu(
    menu_id: str,
    body: DuplicateRequest | None = None,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> MenuDetailOutput:
    name = body.name if body else None
    menu = MenuService(db).duplicate(menu_id, get_user_id(user), name=name)
    return MenuDetailOutput.model_validate(menu)


@router.get("/{menu_id}/items", response_model=MenuItemsGroupedOutput)
def list_menu_items(
    menu_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> MenuItemsGroupedOutput:
    """Items of every section, keyed by section id, in display order."""
    grouped = MenuService(db).items_by_section(menu_id, get_user_id(user))
    return MenuItemsGroupedOutput(
        menu_id=menu_id,
        items_by_section={
            section_id: [ItemOutput.model_validate(i) for i in items]
            for section_id, items in grouped.items()
        },
    )


@router.get("/{menu_id}/translations/status", response_model=MenuTranslationStatusOutput)
def get_translation_status(
    menu_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> MenuTranslationStatusOutput:
    return MenuService(db).translation_status(menu_id, get_user_id(user))


# =============================================================================
# Sections
# =============================================================================


@router.post("/{menu_id}/sections", response_model=SectionOutput, status_code=status.HTTP_201_CREATED)
def create_section(
    menu_id: str,
    body: SectionCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> SectionOutput:
    section = MenuService(db).create_section(menu_id, body.model_dump(), get_user_id(user))
    return SectionOutput.model_validate(section)


@router.put("/{menu_id}/sections/reorder", response_model=list[SectionOutput])
def reorder_sections(
    menu_id: str,
    body: SectionReorderRequest,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> list[SectionOutput]:
    sections = MenuService(db).reorder_sections(
        menu_id, [s.model_dump() for s in body.sections], get_user_id(user)
    )
    return [SectionOutput.model_validate(s) for s in sections]
