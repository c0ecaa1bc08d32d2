"""
Section endpoints and the items inside a section.
"""

from shared.utils.dashboard_schemas import (
    ItemCreate,
    ItemDetailOutput,
    ItemOutput,
    SectionOutput,
    SectionUpdate,
    TranslationUpsert,
)
from rest_api.services.domain import ItemService, MenuService
from ._base import APIRouter, Depends, Session, current_user, get_db, get_user_id, status


router = APIRouter(prefix="/sections", tags=["sections"])


@router.patch("/{section_id}", response_model=SectionOutput)
def update_section(
    section_id: str,
    body: SectionUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> SectionOutput:
    section = MenuService(db).update_section(
        section_id, body.model_dump(exclude_unset=True), get_user_id(user)
    )
    return SectionOutput.model_validate(section)


@router.delete("/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_section(
    section_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> None:
    MenuService(db).delete_section(section_id, get_user_id(user))


@router.put("/{section_id}/translations", response_model=SectionOutput)
def upsert_section_translation(
    section_id: str,
    body: TranslationUpsert,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> SectionOutput:
    section = MenuService(db).upsert_section_translation(
        section_id, get_user_id(user), body.language_code, body.field_name, body.field_value
    )
    return SectionOutput.model_validate(section)


@router.get("/{section_id}/items", response_model=list[ItemOutput])
def list_section_items(
    section_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> list[ItemOutput]:
    items = ItemService(db).list_by_section(section_id, get_user_id(user))
    return [ItemOutput.model_validate(i) for i in items]


@router.post("/{section_id}/items", response_model=ItemDetailOutput, status_code=status.HTTP_201_CREATED)
def create_item(
    section_id: str,
    body: ItemCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> ItemDetailOutput:
    """
    Create an item with optional ingredient names, allergen codes and
    dietary tag codes. Unknown codes are rejected with 400.
    """
    item = ItemService(db).create(section_id, body.model_dump(), get_user_id(user))
    return ItemDetailOutput.model_validate(item)
