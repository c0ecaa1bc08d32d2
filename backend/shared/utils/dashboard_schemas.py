"""
Pydantic schemas for the owner dashboard, translation and AI endpoints.

Dashboard CRUD bodies use snake_case. The translation, auto-complete and
image endpoints speak camelCase on the wire (aliases below) and accept
either spelling on input.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from shared.config.constants import DEFAULT_CURRENCY, ItemType, Limits


# =============================================================================
# Translation rows
# =============================================================================


class TranslationOutput(BaseModel):
    language_code: str
    field_name: str
    field_value: str

    class Config:
        from_attributes = True


class TranslationUpsert(BaseModel):
    language_code: str
    field_name: str
    field_value: str = Field(max_length=Limits.MAX_TRANSLATION_TEXT_LENGTH)


class LabelTranslationUpsert(BaseModel):
    language_code: str
    display_name: str = Field(max_length=Limits.MAX_NAME_LENGTH)


class NameTranslationOutput(BaseModel):
    language_code: str
    name: str

    class Config:
        from_attributes = True


class LabelTranslationOutput(BaseModel):
    language_code: str
    display_name: str

    class Config:
        from_attributes = True


# =============================================================================
# Restaurant Schemas
# =============================================================================


class RestaurantCreate(BaseModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    type: str
    image_url: str | None = None
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    street: str | None = None
    city: str | None = None
    postal_code: str | None = Field(default=None, max_length=20)
    country: str | None = None


class RestaurantUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    type: str | None = None
    image_url: str | None = None
    phone: str | None = None
    email: str | None = None
    street: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None


class RestaurantSocialOutput(BaseModel):
    platform: str
    handle: str

    class Config:
        from_attributes = True


class RestaurantSocialUpsert(BaseModel):
    platform: str
    handle: str = Field(min_length=1, max_length=255)


class RestaurantOutput(BaseModel):
    id: str
    owner_id: str
    name: str
    type: str
    image_url: str | None = None
    phone: str | None = None
    email: str | None = None
    street: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class RestaurantDetailOutput(RestaurantOutput):
    translations: list[TranslationOutput] = []
    socials: list[RestaurantSocialOutput] = []


# =============================================================================
# Menu Schemas
# =============================================================================


class MenuCreate(BaseModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    is_active: bool = True
    # Optional attachment at creation time
    restaurant_id: str | None = None
    is_primary: bool = False
    # Seed sections from the presets of a restaurant type; when
    # use_presets is set without preset_type the restaurant's type is used
    use_presets: bool = False
    preset_type: str | None = None


class MenuUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    is_active: bool | None = None


class MenuOutput(BaseModel):
    id: str
    owner_id: str
    name: str
    description: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class SectionOutput(BaseModel):
    id: str
    menu_id: str
    name: str
    description: str | None = None
    icon: str | None = None
    display_order: int
    is_visible: bool
    translations: list[TranslationOutput] = []

    class Config:
        from_attributes = True


class MenuDetailOutput(MenuOutput):
    sections: list[SectionOutput] = []


class RestaurantMenuAttach(BaseModel):
    menu_id: str
    is_primary: bool = False
    display_order: int = Field(default=0, ge=0)


class RestaurantMenuUpdate(BaseModel):
    is_primary: bool | None = None
    display_order: int | None = Field(default=None, ge=0)


class RestaurantMenuOutput(BaseModel):
    restaurant_id: str
    menu_id: str
    is_primary: bool
    display_order: int
    menu: MenuOutput

    class Config:
        from_attributes = True


# =============================================================================
# Section Schemas
# =============================================================================


class SectionCreate(BaseModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    icon: str | None = Field(default=None, max_length=50)
    display_order: int | None = Field(default=None, ge=0)
    is_visible: bool = True


class SectionUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    icon: str | None = None
    display_order: int | None = Field(default=None, ge=0)
    is_visible: bool | None = None


class SectionOrder(BaseModel):
    id: str
    display_order: int = Field(ge=0)


class SectionReorderRequest(BaseModel):
    sections: list[SectionOrder] = Field(min_length=1)


class SectionPresetOutput(BaseModel):
    name: str
    description: str | None = None
    icon: str | None = None
    display_order: int


# =============================================================================
# Item Schemas
# =============================================================================


class _ItemFields(BaseModel):
    """Columns shared by create and update bodies."""

    price: float | None = Field(default=None, ge=Limits.MIN_PRICE, le=Limits.MAX_PRICE)
    image_url: str | None = None
    is_featured: bool | None = None
    preparation_time: int | None = Field(default=None, ge=0)
    calories: int | None = Field(default=None, ge=0)
    weight: str | None = Field(default=None, max_length=50)
    alcohol_content: float | None = Field(default=None, ge=0, le=100)
    serving_format: str | None = None
    volume_ml: int | None = Field(default=None, ge=0)
    wine_type: str | None = None
    wine_characteristics: list[str] | None = None
    grape_variety: str | None = None
    wine_region: str | None = None
    wine_producer: str | None = None
    vintage: int | None = Field(default=None, ge=1800, le=2100)
    beer_style: str | None = None
    brewery: str | None = None
    ibu: int | None = Field(default=None, ge=0, le=150)
    extra_info: dict[str, Any] | None = None


class ItemCreate(_ItemFields):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    item_type: str = ItemType.FOOD
    currency: str = DEFAULT_CURRENCY
    display_order: int | None = Field(default=None, ge=0)
    is_available: bool = True
    is_featured: bool = False
    ingredients: list[str] = []
    allergens: list[str] = []
    dietary_tags: list[str] = []


class ItemUpdate(_ItemFields):
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    item_type: str | None = None
    currency: str | None = None
    display_order: int | None = Field(default=None, ge=0)
    is_available: bool | None = None
    section_id: str | None = None


class IngredientOutput(BaseModel):
    id: str
    name: str
    display_order: int
    is_main: bool
    translations: list[NameTranslationOutput] = []

    class Config:
        from_attributes = True


class AllergenOutput(BaseModel):
    id: str
    allergen_code: str
    translations: list[LabelTranslationOutput] = []

    class Config:
        from_attributes = True


class DietaryTagOutput(BaseModel):
    id: str
    tag_code: str
    translations: list[LabelTranslationOutput] = []

    class Config:
        from_attributes = True


class ItemOutput(BaseModel):
    id: str
    section_id: str
    item_type: str
    name: str
    description: str | None = None
    price: float | None = None
    currency: str
    image_url: str | None = None
    display_order: int
    is_available: bool
    is_featured: bool
    preparation_time: int | None = None
    calories: int | None = None
    weight: str | None = None
    alcohol_content: float | None = None
    serving_format: str | None = None
    volume_ml: int | None = None
    wine_type: str | None = None
    wine_characteristics: list[str] | None = None
    grape_variety: str | None = None
    wine_region: str | None = None
    wine_producer: str | None = None
    vintage: int | None = None
    beer_style: str | None = None
    brewery: str | None = None
    ibu: int | None = None
    extra_info: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class ItemDetailOutput(ItemOutput):
    ingredients: list[IngredientOutput] = []
    allergens: list[AllergenOutput] = []
    dietary_tags: list[DietaryTagOutput] = []
    translations: list[TranslationOutput] = []


class IngredientCreate(BaseModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    is_main: bool = False
    display_order: int | None = Field(default=None, ge=0)


class IngredientsReplace(BaseModel):
    names: list[str]


class AllergenAdd(BaseModel):
    allergen_code: str


class DietaryTagAdd(BaseModel):
    tag_code: str


class DuplicateRequest(BaseModel):
    # Defaults to the original name with a " (copia)" suffix
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)


class AvailabilityUpdate(BaseModel):
    # None flips the current value
    is_available: bool | None = None


class MenuItemsGroupedOutput(BaseModel):
    menu_id: str
    items_by_section: dict[str, list[ItemOutput]]


# =============================================================================
# Translation Status
# =============================================================================


class EntityTranslationStatus(BaseModel):
    entity_id: str
    label: str
    name_languages: list[str]
    description_languages: list[str]


class SectionTranslationStatus(EntityTranslationStatus):
    items: list[EntityTranslationStatus] = []


class MenuTranslationStatusOutput(BaseModel):
    menu_id: str
    languages: list[str]
    sections: list[SectionTranslationStatus]


# =============================================================================
# Translation Endpoint Schemas (camelCase wire format)
# =============================================================================


class TranslationBatchRequest(BaseModel):
    """
    One (unit, language) pair to translate and persist.

    Every field is optional here so that presence checks produce the
    endpoint's own 400 messages in a fixed order.
    """

    text: str | None = None
    language_code: str | None = Field(default=None, alias="languageCode")
    type: str | None = None
    entity_id: str | None = Field(default=None, alias="entityId")
    menu_id: str | None = Field(default=None, alias="menuId")

    model_config = {"populate_by_name": True}


class TranslationBatchResponse(BaseModel):
    translated_text: str = Field(alias="translatedText")
    saved: bool

    model_config = {"populate_by_name": True}


class TranslationStoreRequest(BaseModel):
    text: str | None = None
    language_code: str | None = Field(default=None, alias="languageCode")

    model_config = {"populate_by_name": True}


class TranslationStoreResponse(BaseModel):
    translated_text: str = Field(alias="translatedText")

    model_config = {"populate_by_name": True}


# =============================================================================
# AI Schemas (camelCase wire format)
# =============================================================================


class AutocompleteRequest(BaseModel):
    item_name: str | None = Field(default=None, alias="itemName")
    item_type: str | None = Field(default=None, alias="itemType")

    model_config = {"populate_by_name": True}


class AutocompleteResponse(BaseModel):
    description: str
    about: str = ""
    ingredients: list[str] = []
    allergens: list[str] = []
    calories: int | None = None


class ImageGenerateRequest(BaseModel):
    prompt: str | None = None
    reference_image_url: str | None = Field(default=None, alias="referenceImageUrl")
    style: str | None = None
    user_id: str | None = Field(default=None, alias="userId")
    item_id: str | None = Field(default=None, alias="itemId")
    size: str | None = None
    quality: str | None = None
    background: str | None = None

    model_config = {"populate_by_name": True}


class ImageGenerateResponse(BaseModel):
    image_url: str = Field(alias="imageUrl")
    prompt: str
    style: str

    model_config = {"populate_by_name": True}


class ImageUploadResponse(BaseModel):
    image_url: str = Field(alias="imageUrl")
    path: str

    model_config = {"populate_by_name": True}


# =============================================================================
# Public Localized Menu
# =============================================================================


class LocalizedField(BaseModel):
    value: str | None = None
    language: str
    translated: bool


class PublicLabel(BaseModel):
    code: str
    label: LocalizedField


class PublicIngredient(BaseModel):
    name: LocalizedField
    is_main: bool


class PublicItem(BaseModel):
    id: str
    item_type: str
    name: LocalizedField
    description: LocalizedField
    price: float | None = None
    currency: str
    image_url: str | None = None
    is_available: bool
    is_featured: bool
    calories: int | None = None
    alcohol_content: float | None = None
    serving_format: str | None = None
    volume_ml: int | None = None
    wine_type: str | None = None
    vintage: int | None = None
    beer_style: str | None = None
    ingredients: list[PublicIngredient] = []
    allergens: list[PublicLabel] = []
    dietary_tags: list[PublicLabel] = []


class PublicSection(BaseModel):
    id: str
    name: LocalizedField
    description: LocalizedField
    icon: str | None = None
    items: list[PublicItem] = []


class PublicMenu(BaseModel):
    id: str
    language: str
    name: LocalizedField
    description: LocalizedField
    sections: list[PublicSection] = []
