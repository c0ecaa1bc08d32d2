"""
Item endpoints: fields, ingredients, allergens, dietary tags,
translations and images.
"""

from shared.utils.dashboard_schemas import (
    AllergenAdd,
    AvailabilityUpdate,
    DietaryTagAdd,
    DuplicateRequest,
    IngredientCreate,
    IngredientsReplace,
    ItemDetailOutput,
    ItemUpdate,
    ImageUploadResponse,
    LabelTranslationUpsert,
    TranslationUpsert,
)
from rest_api.services.domain import ItemService
from ._base import (
    APIRouter,
    Depends,
    File,
    Session,
    StorageClient,
    UploadFile,
    current_user,
    get_db,
    get_storage_client,
    get_user_id,
    status,
)


router = APIRouter(prefix="/items", tags=["items"])


@router.get("/{item_id}", response_model=ItemDetailOutput)
def get_item(
    item_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> ItemDetailOutput:
    item = ItemService(db).get_owned(item_id, get_user_id(user))
    return ItemDetailOutput.model_validate(item)


@router.patch("/{item_id}", response_model=ItemDetailOutput)
def update_item(
    item_id: str,
    body: ItemUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> ItemDetailOutput:
    """
    Partial update. Fields that do not apply to the resulting item type
    are cleared (wine fields outside wine, beer fields outside beer).
    """
    item = ItemService(db).update(item_id, body.model_dump(exclude_unset=True), get_user_id(user))
    return ItemDetailOutput.model_validate(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
    storage: StorageClient = Depends(get_storage_client),
) -> None:
    """Delete an item; its stored image is removed best-effort."""
    await ItemService(db, storage).delete(item_id, get_user_id(user))


@router.post("/{item_id}/duplicate", response_model=ItemDetailOutput, status_code=status.HTTP_201_CREATED)
def duplicate_item(
    item_id: str,
    body: DuplicateRequest | None = None,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> ItemDetailOutput:
    name = body.name if body else None
    item = ItemService(db).duplicate(item_id, get_user_id(user), name=name)
    return ItemDetailOutput.model_validate(item)


@router.post("/{item_id}/availability", response_model=ItemDetailOutput)
def set_item_availability(
    item_id: str,
    body: AvailabilityUpdate | None = None,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> ItemDetailOutput:
    """Set availability, or flip it when no value is given."""
    is_available = body.is_available if body else None
    item = ItemService(db).set_availability(item_id, get_user_id(user), is_available)
    return ItemDetailOutput.model_validate(item)


@router.post("/{item_id}/image", response_model=ImageUploadResponse)
async def upload_item_image(
    item_id: str,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
    storage: StorageClient = Depends(get_storage_client),
) -> ImageUploadResponse:
    data = await file.read()
    url, path = await ItemService(db, storage).upload_image(
        item_id, get_user_id(user), data, file.content_type
    )
    return ImageUploadResponse(image_url=url, path=path)


@router.delete("/{item_id}/image", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item_image(
    item_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
    storage: StorageClient = Depends(get_storage_client),
) -> None:
    await ItemService(db, storage).delete_image(item_id, get_user_id(user))


# =============================================================================
# Ingredients
# =============================================================================


@router.post("/{item_id}/ingredients", response_model=ItemDetailOutput, status_code=status.HTTP_201_CREATED)
def add_ingredient(
    item_id: str,
    body: IngredientCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> ItemDetailOutput:
    item = ItemService(db).add_ingredient(
        item_id, get_user_id(user), body.name, body.is_main, body.display_order
    )
    return ItemDetailOutput.model_validate(item)


@router.put("/{item_id}/ingredients", response_model=ItemDetailOutput)
def replace_ingredients(
    item_id: str,
    body: IngredientsReplace,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> ItemDetailOutput:
    item = ItemService(db).replace_ingredients(item_id, body.names, get_user_id(user))
    return ItemDetailOutput.model_validate(item)


@router.delete("/{item_id}/ingredients/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_ingredient(
    item_id: str,
    ingredient_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> None:
    ItemService(db).remove_ingredient(item_id, ingredient_id, get_user_id(user))


# =============================================================================
# Allergens and Dietary Tags
# =============================================================================


@router.post("/{item_id}/allergens", response_model=ItemDetailOutput, status_code=status.HTTP_201_CREATED)
def add_allergen(
    item_id: str,
    body: AllergenAdd,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> ItemDetailOutput:
    item = ItemService(db).add_allergen(item_id, body.allergen_code, get_user_id(user))
    return ItemDetailOutput.model_validate(item)


@router.delete("/{item_id}/allergens/{code}", status_code=status.HTTP_204_NO_CONTENT)
def remove_allergen(
    item_id: str,
    code: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> None:
    ItemService(db).remove_allergen(item_id, code, get_user_id(user))


@router.post("/{item_id}/dietary-tags", response_model=ItemDetailOutput, status_code=status.HTTP_201_CREATED)
def add_dietary_tag(
    item_id: str,
    body: DietaryTagAdd,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> ItemDetailOutput:
    item = ItemService(db).add_dietary_tag(item_id, body.tag_code, get_user_id(user))
    return ItemDetailOutput.model_validate(item)


@router.delete("/{item_id}/dietary-tags/{code}", status_code=status.HTTP_204_NO_CONTENT)
def remove_dietary_tag(
    item_id: str,
    code: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> None:
    ItemService(db).remove_dietary_tag(item_id, code, get_user_id(user))


@router.put("/{item_id}/dietary-tags/{code}/translations", response_model=ItemDetailOutput)
def upsert_dietary_tag_translation(
    item_id: str,
    code: str,
    body: LabelTranslationUpsert,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> ItemDetailOutput:
    item = ItemService(db).upsert_dietary_tag_translation(
        item_id, code, get_user_id(user), body.language_code, body.display_name
    )
    return ItemDetailOutput.model_validate(item)


@router.delete(
    "/{item_id}/dietary-tags/{code}/translations/{language_code}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_dietary_tag_translation(
    item_id: str,
    code: str,
    language_code: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> None:
    ItemService(db).delete_dietary_tag_translation(item_id, code, get_user_id(user), language_code)


# =============================================================================
# Translations
# =============================================================================


@router.put("/{item_id}/translations", response_model=ItemDetailOutput)
def upsert_item_translation(
    item_id: str,
    body: TranslationUpsert,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> ItemDetailOutput:
    item = ItemService(db).upsert_translation(
        item_id, get_user_id(user), body.language_code, body.field_name, body.field_value
    )
    return ItemDetailOutput.model_validate(item)


@router.delete(
    "/{item_id}/translations/{language_code}/{field_name}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_item_translation(
    item_id: str,
    language_code: str,
    field_name: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> None:
    ItemService(db).delete_translation(item_id, get_user_id(user), language_code, field_name)
