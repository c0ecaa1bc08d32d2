"""
Restaurant management endpoints.
"""

from shared.utils.dashboard_schemas import (
    ImageUploadResponse,
    RestaurantCreate,
    RestaurantDetailOutput,
    RestaurantMenuAttach,
    RestaurantMenuOutput,
    RestaurantMenuUpdate,
    RestaurantOutput,
    RestaurantSocialUpsert,
    RestaurantUpdate,
    TranslationUpsert,
)
from rest_api.services.domain import MenuService, RestaurantService
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


router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("", response_model=list[RestaurantOutput])
def list_restaurants(
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> list[RestaurantOutput]:
    restaurants = RestaurantService(db).list_own(get_user_id(user))
    return [RestaurantOutput.model_validate(r) for r in restaurants]


@router.post("", response_model=RestaurantDetailOutput, status_code=status.HTTP_201_CREATED)
def create_restaurant(
    body: RestaurantCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> RestaurantDetailOutput:
    restaurant = RestaurantService(db).create(body.model_dump(), get_user_id(user))
    return RestaurantDetailOutput.model_validate(restaurant)


@router.get("/{restaurant_id}", response_model=RestaurantDetailOutput)
def get_restaurant(
    restaurant_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> RestaurantDetailOutput:
    restaurant = RestaurantService(db).get_owned(restaurant_id, get_user_id(user))
    return RestaurantDetailOutput.model_validate(restaurant)


@router.patch("/{restaurant_id}", response_model=RestaurantDetailOutput)
def update_restaurant(
    restaurant_id: str,
    body: RestaurantUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> RestaurantDetailOutput:
    restaurant = RestaurantService(db).update(
        restaurant_id, body.model_dump(exclude_unset=True), get_user_id(user)
    )
    return RestaurantDetailOutput.model_validate(restaurant)


@router.delete("/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_restaurant(
    restaurant_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
    storage: StorageClient = Depends(get_storage_client),
) -> None:
    """Delete a restaurant; its stored cover image is removed best-effort."""
    await RestaurantService(db, storage).delete(restaurant_id, get_user_id(user))


# =============================================================================
# Image
# =============================================================================


@router.post("/{restaurant_id}/image", response_model=ImageUploadResponse)
async def upload_restaurant_image(
    restaurant_id: str,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
    storage: StorageClient = Depends(get_storage_client),
) -> ImageUploadResponse:
    """Upload or replace the cover image (multipart field "file")."""
    data = await file.read()
    url, path = await RestaurantService(db, storage).upload_image(
        restaurant_id, get_user_id(user), data, file.content_type
    )
    return ImageUploadResponse(image_url=url, path=path)


@router.delete("/{restaurant_id}/image", status_code=status.HTTP_204_NO_CONTENT)
async def delete_restaurant_image(
    restaurant_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
    storage: StorageClient = Depends(get_storage_client),
) -> None:
    await RestaurantService(db, storage).delete_image(restaurant_id, get_user_id(user))


# =============================================================================
# Translations and Socials
# =============================================================================


@router.put("/{restaurant_id}/translations", response_model=RestaurantDetailOutput)
def upsert_restaurant_translation(
    restaurant_id: str,
    body: TranslationUpsert,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> RestaurantDetailOutput:
    restaurant = RestaurantService(db).upsert_translation(
        restaurant_id, get_user_id(user), body.language_code, body.field_name, body.field_value
    )
    return RestaurantDetailOutput.model_validate(restaurant)


@router.delete(
    "/{restaurant_id}/translations/{language_code}/{field_name}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_restaurant_translation(
    restaurant_id: str,
    language_code: str,
    field_name: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> None:
    RestaurantService(db).delete_translation(restaurant_id, get_user_id(user), language_code, field_name)


@router.put("/{restaurant_id}/socials", response_model=RestaurantDetailOutput)
def upsert_restaurant_social(
    restaurant_id: str,
    body: RestaurantSocialUpsert,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> RestaurantDetailOutput:
    restaurant = RestaurantService(db).upsert_social(
        restaurant_id, get_user_id(user), body.platform, body.handle
    )
    return RestaurantDetailOutput.model_validate(restaurant)


@router.delete("/{restaurant_id}/socials/{platform}", status_code=status.HTTP_204_NO_CONTENT)
def delete_restaurant_social(
    restaurant_id: str,
    platform: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> None:
    RestaurantService(db).delete_social(restaurant_id, get_user_id(user), platform)


# =============================================================================
# Attached Menus
# =============================================================================


@router.get("/{restaurant_id}/menus", response_model=list[RestaurantMenuOutput])
def list_restaurant_menus(
    restaurant_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> list[RestaurantMenuOutput]:
    links = RestaurantService(db).list_menus(restaurant_id, get_user_id(user))
    return [RestaurantMenuOutput.model_validate(link) for link in links]


@router.post(
    "/{restaurant_id}/menus",
    response_model=RestaurantMenuOutput,
    status_code=status.HTTP_201_CREATED,
)
def attach_menu(
    restaurant_id: str,
    body: RestaurantMenuAttach,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> RestaurantMenuOutput:
    """
    Attach one of the caller's menus. With is_primary the previous
    primary menu of the restaurant is cleared in the same transaction.
    """
    link = MenuService(db).attach(
        restaurant_id,
        body.menu_id,
        get_user_id(user),
        is_primary=body.is_primary,
        display_order=body.display_order,
    )
    return RestaurantMenuOutput.model_validate(link)


@router.patch("/{restaurant_id}/menus/{menu_id}", response_model=RestaurantMenuOutput)
def update_menu_attachment(
    restaurant_id: str,
    menu_id: str,
    body: RestaurantMenuUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> RestaurantMenuOutput:
    link = MenuService(db).update_attachment(
        restaurant_id,
        menu_id,
        get_user_id(user),
        is_primary=body.is_primary,
        display_order=body.display_order,
    )
    return RestaurantMenuOutput.model_validate(link)


@router.delete("/{restaurant_id}/menus/{menu_id}", status_code=status.HTTP_204_NO_CONTENT)
def detach_menu(
    restaurant_id: str,
    menu_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> None:
    MenuService(db).detach(restaurant_id, menu_id, get_user_id(user))
