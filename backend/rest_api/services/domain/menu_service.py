"""
Menu Service - Clean Architecture Implementation.

Handles menus, their sections, restaurant attachments and the
translation status overview.

Usage:
    from rest_api.services.domain import MenuService

    service = MenuService(db)
    menu = service.create(data, user_id)
    service.attach(restaurant_id, menu.id, user_id, is_primary=True)
"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy.orm import Session

from rest_api.models import Menu, MenuItem, MenuSection, RestaurantMenu
from rest_api.repositories import (
    get_item_repository,
    get_menu_repository,
    get_restaurant_repository,
    get_translation_repository,
)
from rest_api.repositories.translation import SECTION
from rest_api.services.base_service import BaseService
from rest_api.services.domain.section_presets import SectionPreset, get_section_presets
from shared.config.constants import RESTAURANT_TYPES, Languages, TranslationField
from shared.config.logging import get_logger
from shared.utils.dashboard_schemas import (
    EntityTranslationStatus,
    MenuTranslationStatusOutput,
    SectionTranslationStatus,
)
from shared.utils.exceptions import (
    DuplicateEntityError,
    InvalidCodeError,
    NotFoundError,
    ValidationError,
)
from shared.utils.localization import languages_with_field
from shared.utils.validators import is_blank

logger = get_logger(__name__)


class MenuService(BaseService):
    """
    Service for menus and sections.

    Business rules:
    - A menu belongs to one owner and can be attached to several of the
      owner's restaurants
    - At most one primary menu per restaurant; setting a new primary
      clears the previous one in the same transaction
    - Section display order defaults to the end of the menu
    - Sections and items are owned through their menu
    """

    def __init__(self, db: Session):
        super().__init__(db)
        self._menus = get_menu_repository(db)
        self._restaurants = get_restaurant_repository(db)
        self._items = get_item_repository(db)
        self._translations = get_translation_repository(db)

    # =========================================================================
    # Menus
    # =========================================================================

    def get_owned(self, menu_id: str, user_id: str) -> Menu:
        menu = self._menus.get(menu_id)
        return self._ensure_owned(menu, menu.owner_id if menu else None, user_id, "Menu", menu_id)

    def list_own(self, user_id: str) -> Sequence[Menu]:
        return self._menus.list_by_owner(user_id)

    def create(self, data: dict[str, Any], user_id: str) -> Menu:
        """
        Create a menu, optionally attached to a restaurant and seeded with
        the section presets of a restaurant type.
        """
        restaurant_id = data.pop("restaurant_id", None)
        is_primary = data.pop("is_primary", False)
        use_presets = data.pop("use_presets", False)
        preset_type = data.pop("preset_type", None)

        restaurant = None
        if restaurant_id is not None:
            restaurant = self._owned_restaurant(restaurant_id, user_id)

        presets: list[SectionPreset] = []
        if use_presets:
            preset_type = preset_type or (restaurant.type if restaurant else None)
            if preset_type is None:
                raise ValidationError("preset_type or restaurant_id is required to use presets")
            if preset_type not in RESTAURANT_TYPES:
                raise InvalidCodeError("restaurant type", preset_type)
            presets = get_section_presets(preset_type)

        with self._writing("menu creation", user_id=user_id):
            menu = self._menus.add(Menu(owner_id=user_id, **data))
            for preset in presets:
                self._menus.add_section(
                    MenuSection(
                        menu_id=menu.id,
                        name=preset.name,
                        description=preset.description,
                        icon=preset.icon,
                        display_order=preset.display_order,
                        is_visible=True,
                    )
                )
            if restaurant is not None:
                self._link(restaurant.id, menu.id, is_primary=is_primary, display_order=0)

        logger.info(
            "Menu created",
            menu_id=menu.id,
            user_id=user_id,
            sections=len(presets),
            restaurant_id=restaurant_id,
        )
        return self.get_owned(menu.id, user_id)

    def update(self, menu_id: str, data: dict[str, Any], user_id: str) -> Menu:
        menu = self.get_owned(menu_id, user_id)
        if "name" in data and data["name"] is None:
            raise ValidationError("Menu name cannot be empty")
        if "is_active" in data and data["is_active"] is None:
            del data["is_active"]

        for key, value in data.items():
            setattr(menu, key, value)

        self._commit("menu update", menu_id=menu_id)
        return self.get_owned(menu_id, user_id)

    def delete(self, menu_id: str, user_id: str) -> None:
        """Hard delete; sections, items and their relations go with it."""
        menu = self.get_owned(menu_id, user_id)
        with self._writing("menu deletion", menu_id=menu_id):
            self._menus.delete(menu)
        logger.info("Menu deleted", menu_id=menu_id, user_id=user_id)

    def duplicate(self, menu_id: str, user_id: str, name: str | None = None) -> Menu:
        """Copy a menu and its sections; items and translations are not copied."""
        original = self.get_owned(menu_id, user_id)

        with self._writing("menu duplication", menu_id=menu_id):
            menu = self._menus.add(
                Menu(
                    owner_id=user_id,
                    name=name or f"{original.name} (copia)",
                    description=original.description,
                    is_active=original.is_active,
                )
            )
            for section in original.sections:
                self._menus.add_section(
                    MenuSection(
                        menu_id=menu.id,
                        name=section.name,
                        description=section.description,
                        icon=section.icon,
                        display_order=section.display_order,
                        is_visible=section.is_visible,
                    )
                )

        return self.get_owned(menu.id, user_id)

    # =========================================================================
    # Restaurant Attachments
    # =========================================================================

    def attach(
        self,
        restaurant_id: str,
        menu_id: str,
        user_id: str,
        *,
        is_primary: bool = False,
        display_order: int = 0,
    ) -> RestaurantMenu:
        self._owned_restaurant(restaurant_id, user_id)
        self.get_owned(menu_id, user_id)
        if self._menus.get_link(restaurant_id, menu_id) is not None:
            raise DuplicateEntityError("Menu attachment", menu_id, restaurant_id=restaurant_id)

        with self._writing("menu attachment", restaurant_id=restaurant_id, menu_id=menu_id):
            link = self._link(restaurant_id, menu_id, is_primary=is_primary, display_order=display_order)
        self._db.refresh(link)
        return link

    def update_attachment(
        self,
        restaurant_id: str,
        menu_id: str,
        user_id: str,
        *,
        is_primary: bool | None = None,
        display_order: int | None = None,
    ) -> RestaurantMenu:
        link = self._owned_link(restaurant_id, menu_id, user_id)

        with self._writing("menu attachment update", restaurant_id=restaurant_id, menu_id=menu_id):
            if is_primary and not link.is_primary:
                self._menus.clear_primary(restaurant_id)
                link.is_primary = True
            elif is_primary is False:
                link.is_primary = False
            if display_order is not None:
                link.display_order = display_order

        self._db.refresh(link)
        return link

    def detach(self, restaurant_id: str, menu_id: str, user_id: str) -> None:
        link = self._owned_link(restaurant_id, menu_id, user_id)
        with self._writing("menu detachment", restaurant_id=restaurant_id, menu_id=menu_id):
            self._menus.delete_link(link)

    def _link(self, restaurant_id: str, menu_id: str, *, is_primary: bool, display_order: int) -> RestaurantMenu:
        # Caller owns the transaction
        if is_primary:
            self._menus.clear_primary(restaurant_id)
        return self._menus.add_link(
            RestaurantMenu(
                restaurant_id=restaurant_id,
                menu_id=menu_id,
                is_primary=is_primary,
                display_order=display_order,
            )
        )

    def _owned_link(self, restaurant_id: str, menu_id: str, user_id: str) -> RestaurantMenu:
        self._owned_restaurant(restaurant_id, user_id)
        link = self._menus.get_link(restaurant_id, menu_id)
        if link is None:
            raise NotFoundError("Menu attachment", menu_id, restaurant_id=restaurant_id)
        return link

    def _owned_restaurant(self, restaurant_id: str, user_id: str):
        restaurant = self._restaurants.get(restaurant_id)
        return self._ensure_owned(
            restaurant,
            restaurant.owner_id if restaurant else None,
            user_id,
            "Restaurant",
            restaurant_id,
        )

    # =========================================================================
    # Sections
    # =========================================================================

    def get_section_owned(self, section_id: str, user_id: str) -> MenuSection:
        section = self._menus.get_section(section_id)
        return self._ensure_owned(
            section,
            section.menu.owner_id if section else None,
            user_id,
            "Section",
            section_id,
        )

    def create_section(self, menu_id: str, data: dict[str, Any], user_id: str) -> MenuSection:
        self.get_owned(menu_id, user_id)
        if data.get("display_order") is None:
            data["display_order"] = self._menus.next_section_order(menu_id)

        with self._writing("section creation", menu_id=menu_id):
            section = self._menus.add_section(MenuSection(menu_id=menu_id, **data))
        return self.get_section_owned(section.id, user_id)

    def update_section(self, section_id: str, data: dict[str, Any], user_id: str) -> MenuSection:
        section = self.get_section_owned(section_id, user_id)
        if "name" in data and data["name"] is None:
            raise ValidationError("Section name cannot be empty")
        for flag in ("display_order", "is_visible"):
            if flag in data and data[flag] is None:
                del data[flag]

        for key, value in data.items():
            setattr(section, key, value)

        self._commit("section update", section_id=section_id)
        return self.get_section_owned(section_id, user_id)

    def delete_section(self, section_id: str, user_id: str) -> None:
        section = self.get_section_owned(section_id, user_id)
        with self._writing("section deletion", section_id=section_id):
            self._menus.delete_section(section)

    def reorder_sections(self, menu_id: str, orders: list[dict[str, Any]], user_id: str) -> Sequence[MenuSection]:
        """Apply a list of {id, display_order}; every id must belong to the menu."""
        self.get_owned(menu_id, user_id)
        sections = {section.id: section for section in self._menus.list_sections(menu_id)}

        unknown = [entry["id"] for entry in orders if entry["id"] not in sections]
        if unknown:
            raise ValidationError("Sections do not belong to this menu", menu_id=menu_id, section_ids=unknown)

        for entry in orders:
            sections[entry["id"]].display_order = entry["display_order"]

        self._commit("section reorder", menu_id=menu_id)
        return self._menus.list_sections(menu_id)

    def upsert_section_translation(
        self,
        section_id: str,
        user_id: str,
        language_code: str,
        field_name: str,
        value: str,
    ) -> MenuSection:
        self.get_section_owned(section_id, user_id)
        if language_code not in Languages.TARGETS:
            raise InvalidCodeError("language code", language_code)
        if field_name not in TranslationField.SECTION_FIELDS:
            raise InvalidCodeError("section translation field", field_name)
        if is_blank(value):
            raise ValidationError("Translation value is required")

        with self._writing("section translation", section_id=section_id, language_code=language_code):
            self._translations.upsert(SECTION, section_id, language_code, field_name, value.strip())
        return self.get_section_owned(section_id, user_id)

    # =========================================================================
    # Items and Translation Status
    # =========================================================================

    def items_by_section(self, menu_id: str, user_id: str) -> dict[str, list[MenuItem]]:
        self.get_owned(menu_id, user_id)
        return self._menus.items_by_section(menu_id)

    def translation_status(self, menu_id: str, user_id: str) -> MenuTranslationStatusOutput:
        """Languages holding a stored name / description per section and item."""
        self.get_owned(menu_id, user_id)
        sections = self._menus.list_sections(menu_id)
        items = self._items.list_with_relations([section.id for section in sections])

        items_by_section: dict[str, list[MenuItem]] = {section.id: [] for section in sections}
        for item in items:
            items_by_section[item.section_id].append(item)

        return MenuTranslationStatusOutput(
            menu_id=menu_id,
            languages=list(Languages.TARGETS),
            sections=[
                SectionTranslationStatus(
                    **_status(section.id, section.name, section.translations).model_dump(),
                    items=[
                        _status(item.id, item.name, item.translations)
                        for item in items_by_section[section.id]
                    ],
                )
                for section in sections
            ],
        )


def _status(entity_id: str, label: str, translations) -> EntityTranslationStatus:
    return EntityTranslationStatus(
        entity_id=entity_id,
        label=label,
        name_languages=languages_with_field(translations, TranslationField.NAME),
        description_languages=languages_with_field(translations, TranslationField.DESCRIPTION),
    )
