"""
Item Service - Clean Architecture Implementation.

Handles menu items and their ingredients, allergens, dietary tags,
translations and images.

Usage:
    from rest_api.services.domain import ItemService

    service = ItemService(db)
    item = service.create(section_id, data, user_id)
    service.add_allergen(item.id, "glutine", user_id)
"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy.orm import Session

from rest_api.models import ItemDietaryTag, ItemIngredient, MenuItem, MenuSection
from rest_api.repositories import (
    get_item_repository,
    get_menu_repository,
    get_translation_repository,
)
from rest_api.repositories.translation import DIETARY_TAG, ITEM
from rest_api.services.base_service import BaseService
from rest_api.services.storage import (
    StorageClient,
    StorageClientError,
    upload_path,
    validate_image_upload,
)
from shared.config.constants import (
    ALCOHOL_FIELDS,
    ALLERGEN_CODES,
    BEER_FIELDS,
    BEER_STYLES,
    DIETARY_TAG_CODES,
    SERVING_FORMATS,
    WINE_CHARACTERISTICS,
    WINE_FIELDS,
    WINE_TYPES,
    ItemType,
    Languages,
    TranslationField,
)
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.utils.exceptions import (
    DuplicateEntityError,
    InvalidCodeError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from shared.utils.validators import is_blank, validate_image_url

logger = get_logger(__name__)

# Columns copied by duplicate(); identity, position and flags are set explicitly
_COPIED_COLUMNS = (
    "item_type", "description", "price", "currency", "is_available",
    "preparation_time", "calories", "weight", "extra_info",
    *ALCOHOL_FIELDS, *WINE_FIELDS, *BEER_FIELDS,
)

_NOT_NULLABLE = ("name", "item_type", "currency", "display_order", "is_available", "is_featured")


def normalize_item_fields(item: MenuItem) -> None:
    """
    Clear type-specific columns that do not apply to the item type:
    wine columns unless wine, beer columns unless beer, alcohol columns
    unless the type is one of the alcoholic types.
    """
    if item.item_type != ItemType.WINE:
        for field in WINE_FIELDS:
            setattr(item, field, None)
    if item.item_type != ItemType.BEER:
        for field in BEER_FIELDS:
            setattr(item, field, None)
    if item.item_type not in ItemType.ALCOHOLIC:
        for field in ALCOHOL_FIELDS:
            setattr(item, field, None)


def validate_item_codes(data: dict[str, Any]) -> None:
    """Reject codes outside the closed vocabularies."""
    if "item_type" in data and data["item_type"] not in ItemType.ALL:
        raise InvalidCodeError("item type", data["item_type"])
    if data.get("serving_format") is not None and data["serving_format"] not in SERVING_FORMATS:
        raise InvalidCodeError("serving format", data["serving_format"])
    if data.get("wine_type") is not None and data["wine_type"] not in WINE_TYPES:
        raise InvalidCodeError("wine type", data["wine_type"])
    if data.get("beer_style") is not None and data["beer_style"] not in BEER_STYLES:
        raise InvalidCodeError("beer style", data["beer_style"])
    for code in data.get("wine_characteristics") or []:
        if code not in WINE_CHARACTERISTICS:
            raise InvalidCodeError("wine characteristic", code)
    for code in data.get("allergens") or []:
        if code not in ALLERGEN_CODES:
            raise InvalidCodeError("allergen code", code)
    for code in data.get("dietary_tags") or []:
        if code not in DIETARY_TAG_CODES:
            raise InvalidCodeError("dietary tag", code)


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


class ItemService(BaseService):
    """
    Service for menu items.

    Business rules:
    - Items are owned through section -> menu -> owner
    - Codes (type, allergens, tags, wine/beer vocabularies) are closed sets
    - Type-specific columns are cleared when they do not apply
    - Display order defaults to the end of the section
    """

    def __init__(self, db: Session, storage: StorageClient | None = None):
        super().__init__(db)
        self._items = get_item_repository(db)
        self._menus = get_menu_repository(db)
        self._translations = get_translation_repository(db)
        self._storage = storage

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_owned(self, item_id: str, user_id: str) -> MenuItem:
        item = self._items.get_with_relations(item_id)
        return self._ensure_owned(
            item,
            item.section.menu.owner_id if item else None,
            user_id,
            "Item",
            item_id,
        )

    def list_by_section(self, section_id: str, user_id: str) -> Sequence[MenuItem]:
        self._owned_section(section_id, user_id)
        return self._items.list_by_section(section_id)

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create(self, section_id: str, data: dict[str, Any], user_id: str) -> MenuItem:
        self._owned_section(section_id, user_id)
        validate_item_codes(data)
        data["image_url"] = self._validate_url(data.get("image_url"))

        ingredients = [name.strip() for name in data.pop("ingredients", []) if not is_blank(name)]
        allergens = _unique(data.pop("allergens", []))
        dietary_tags = _unique(data.pop("dietary_tags", []))
        if data.get("display_order") is None:
            data["display_order"] = self._items.next_display_order(section_id)

        item = MenuItem(section_id=section_id, **data)
        normalize_item_fields(item)

        with self._writing("item creation", section_id=section_id):
            self._items.add(item)
            for order, name in enumerate(ingredients):
                self._items.add_ingredient(item.id, name, order)
            for code in allergens:
                self._items.add_allergen(item.id, code)
            for code in dietary_tags:
                self._items.add_dietary_tag(item.id, code)

        logger.info("Item created", item_id=item.id, section_id=section_id, item_type=item.item_type)
        return self.get_owned(item.id, user_id)

    def update(self, item_id: str, data: dict[str, Any], user_id: str) -> MenuItem:
        item = self.get_owned(item_id, user_id)
        for field in _NOT_NULLABLE:
            if field in data and data[field] is None:
                del data[field]
        validate_item_codes(data)
        if "image_url" in data:
            data["image_url"] = self._validate_url(data["image_url"])
        if "section_id" in data:
            target = self._owned_section(data["section_id"], user_id)
            if target.menu_id != item.section.menu_id:
                raise ValidationError("Items can only move between sections of the same menu")

        for key, value in data.items():
            setattr(item, key, value)
        normalize_item_fields(item)

        self._commit("item update", item_id=item_id)
        return self.get_owned(item_id, user_id)

    async def delete(self, item_id: str, user_id: str) -> None:
        item = self.get_owned(item_id, user_id)
        image_url = item.image_url
        with self._writing("item deletion", item_id=item_id):
            self._items.delete(item)
        logger.info("Item deleted", item_id=item_id, user_id=user_id)

        await self._remove_image(image_url)

    def set_availability(self, item_id: str, user_id: str, is_available: bool | None = None) -> MenuItem:
        """Set availability, or flip it when no value is given."""
        item = self.get_owned(item_id, user_id)
        item.is_available = (not item.is_available) if is_available is None else is_available
        self._commit("item availability", item_id=item_id)
        return self.get_owned(item_id, user_id)

    def duplicate(self, item_id: str, user_id: str, name: str | None = None) -> MenuItem:
        """
        Copy an item with its ingredients, allergens and dietary tags.
        The copy is placed right after the original and is never featured.
        Translations are not copied.
        """
        original = self.get_owned(item_id, user_id)

        with self._writing("item duplication", item_id=item_id):
            self._items.shift_display_orders(original.section_id, original.display_order + 1)
            copy = MenuItem(
                section_id=original.section_id,
                name=name or f"{original.name} (copia)",
                display_order=original.display_order + 1,
                is_featured=False,
                **{column: getattr(original, column) for column in _COPIED_COLUMNS},
            )
            self._items.add(copy)
            for ingredient in original.ingredients:
                self._items.add_ingredient(copy.id, ingredient.name, ingredient.display_order, ingredient.is_main)
            for allergen in original.allergens:
                self._items.add_allergen(copy.id, allergen.allergen_code)
            for tag in original.dietary_tags:
                self._items.add_dietary_tag(copy.id, tag.tag_code)

        logger.info("Item duplicated", item_id=item_id, copy_id=copy.id)
        return self.get_owned(copy.id, user_id)

    # =========================================================================
    # Image
    # =========================================================================

    async def upload_image(
        self,
        item_id: str,
        user_id: str,
        data: bytes,
        content_type: str | None,
    ) -> tuple[str, str]:
        """
        Store an uploaded image and set it on the item.
        The previous stored image is removed afterwards.

        Returns:
            (public URL, object path)
        """
        item = self.get_owned(item_id, user_id)
        extension = validate_image_upload(content_type, data)
        if self._storage is None:
            raise StorageError("item image upload", reason="storage client not configured")

        path = upload_path(user_id, item_id, extension=extension)
        try:
            url = await self._storage.upload(settings.item_images_bucket, path, data, content_type)
        except StorageClientError as e:
            raise StorageError("item image upload", item_id=item_id, error=str(e))

        previous = item.image_url
        item.image_url = url
        self._commit("item image update", item_id=item_id)

        await self._remove_image(previous)
        return url, path

    async def delete_image(self, item_id: str, user_id: str) -> None:
        item = self.get_owned(item_id, user_id)
        if not item.image_url:
            raise NotFoundError("Item image", item_id)

        previous = item.image_url
        item.image_url = None
        self._commit("item image removal", item_id=item_id)

        await self._remove_image(previous)

    async def _remove_image(self, url: str | None) -> None:
        # Only objects in our bucket; pasted external URLs are left alone
        if self._storage is None:
            return
        path = self._storage.path_from_public_url(settings.item_images_bucket, url)
        if path is None:
            return
        try:
            await self._storage.remove(settings.item_images_bucket, [path])
        except StorageClientError as e:
            logger.warning("Could not remove item image", path=path, error=str(e))

    # =========================================================================
    # Ingredients
    # =========================================================================

    def add_ingredient(
        self,
        item_id: str,
        user_id: str,
        name: str,
        is_main: bool = False,
        display_order: int | None = None,
    ) -> MenuItem:
        self.get_owned(item_id, user_id)
        if is_blank(name):
            raise ValidationError("Ingredient name is required")
        if display_order is None:
            display_order = self._items.next_ingredient_order(item_id)

        with self._writing("ingredient creation", item_id=item_id):
            self._items.add_ingredient(item_id, name.strip(), display_order, is_main)
        return self.get_owned(item_id, user_id)

    def remove_ingredient(self, item_id: str, ingredient_id: str, user_id: str) -> None:
        self.get_owned(item_id, user_id)
        ingredient = self._items.get_ingredient(ingredient_id)
        if ingredient is None or ingredient.item_id != item_id:
            raise NotFoundError("Ingredient", ingredient_id)
        with self._writing("ingredient removal", item_id=item_id):
            self._items.remove_ingredient(ingredient)

    def replace_ingredients(self, item_id: str, names: list[str], user_id: str) -> MenuItem:
        """Replace the whole list; order follows the given names."""
        self.get_owned(item_id, user_id)
        cleaned = [name.strip() for name in names if not is_blank(name)]

        with self._writing("ingredient replacement", item_id=item_id):
            self._items.clear_ingredients(item_id)
            for order, name in enumerate(cleaned):
                self._items.add_ingredient(item_id, name, order)
        return self.get_owned(item_id, user_id)

    # =========================================================================
    # Allergens and Dietary Tags
    # =========================================================================

    def add_allergen(self, item_id: str, code: str, user_id: str) -> MenuItem:
        self.get_owned(item_id, user_id)
        if code not in ALLERGEN_CODES:
            raise InvalidCodeError("allergen code", code)
        if self._items.has_allergen(item_id, code):
            raise DuplicateEntityError("Allergen", code, item_id=item_id)

        with self._writing("allergen creation", item_id=item_id):
            self._items.add_allergen(item_id, code)
        return self.get_owned(item_id, user_id)

    def remove_allergen(self, item_id: str, code: str, user_id: str) -> None:
        self.get_owned(item_id, user_id)
        with self._writing("allergen removal", item_id=item_id):
            removed = self._items.remove_allergen(item_id, code)
        if not removed:
            raise NotFoundError("Allergen", code)

    def add_dietary_tag(self, item_id: str, code: str, user_id: str) -> MenuItem:
        self.get_owned(item_id, user_id)
        if code not in DIETARY_TAG_CODES:
            raise InvalidCodeError("dietary tag", code)
        if self._items.has_dietary_tag(item_id, code):
            raise DuplicateEntityError("Dietary tag", code, item_id=item_id)

        with self._writing("dietary tag creation", item_id=item_id):
            self._items.add_dietary_tag(item_id, code)
        return self.get_owned(item_id, user_id)

    def remove_dietary_tag(self, item_id: str, code: str, user_id: str) -> None:
        self.get_owned(item_id, user_id)
        with self._writing("dietary tag removal", item_id=item_id):
            removed = self._items.remove_dietary_tag(item_id, code)
        if not removed:
            raise NotFoundError("Dietary tag", code)

    def upsert_dietary_tag_translation(
        self,
        item_id: str,
        code: str,
        user_id: str,
        language_code: str,
        display_name: str,
    ) -> MenuItem:
        """Store the label of one of the item's dietary tags in a target language."""
        tag = self._owned_tag(item_id, code, user_id)
        if language_code not in Languages.TARGETS:
            raise InvalidCodeError("language code", language_code)
        if is_blank(display_name):
            raise ValidationError("Translation value is required")

        with self._writing("dietary tag translation", item_id=item_id, language_code=language_code):
            self._translations.upsert(
                DIETARY_TAG, tag.id, language_code, TranslationField.DISPLAY_NAME, display_name.strip()
            )
        return self.get_owned(item_id, user_id)

    def delete_dietary_tag_translation(self, item_id: str, code: str, user_id: str, language_code: str) -> None:
        tag = self._owned_tag(item_id, code, user_id)
        with self._writing("dietary tag translation removal", item_id=item_id):
            removed = self._translations.delete(DIETARY_TAG, tag.id, language_code)
        if not removed:
            raise NotFoundError("Dietary tag translation", f"{code}/{language_code}")

    # =========================================================================
    # Translations
    # =========================================================================

    def upsert_translation(
        self,
        item_id: str,
        user_id: str,
        language_code: str,
        field_name: str,
        value: str,
    ) -> MenuItem:
        self.get_owned(item_id, user_id)
        if language_code not in Languages.TARGETS:
            raise InvalidCodeError("language code", language_code)
        if field_name not in TranslationField.ITEM_FIELDS:
            raise InvalidCodeError("item translation field", field_name)
        if is_blank(value):
            raise ValidationError("Translation value is required")

        with self._writing("item translation", item_id=item_id, language_code=language_code):
            self._translations.upsert(ITEM, item_id, language_code, field_name, value.strip())
        return self.get_owned(item_id, user_id)

    def delete_translation(self, item_id: str, user_id: str, language_code: str, field_name: str) -> None:
        self.get_owned(item_id, user_id)
        with self._writing("item translation removal", item_id=item_id):
            removed = self._translations.delete(ITEM, item_id, language_code, field_name)
        if not removed:
            raise NotFoundError("Item translation", f"{language_code}/{field_name}")

    # =========================================================================
    # Helpers
    # =========================================================================

    def _owned_tag(self, item_id: str, code: str, user_id: str) -> ItemDietaryTag:
        item = self.get_owned(item_id, user_id)
        for tag in item.dietary_tags:
            if tag.tag_code == code:
                return tag
        raise NotFoundError("Dietary tag", code)

    def _owned_section(self, section_id: str, user_id: str) -> MenuSection:
        section = self._menus.get_section(section_id)
        return self._ensure_owned(
            section,
            section.menu.owner_id if section else None,
            user_id,
            "Section",
            section_id,
        )

    @staticmethod
    def _validate_url(url: str | None) -> str | None:
        try:
            return validate_image_url(url)
        except ValueError as e:
            raise ValidationError(str(e), field="image_url")
