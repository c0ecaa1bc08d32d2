"""
Public, localized rendering of a menu.

Every text field is resolved through localize(); the output marks each
value as the Italian default or a stored translation. Allergen and
dietary tag codes without a translation row fall back to their Italian
labels.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from rest_api.models import ItemAllergen, ItemDietaryTag, ItemIngredient, MenuItem, MenuSection
from rest_api.repositories import get_item_repository, get_menu_repository
from shared.config.constants import (
    ALLERGEN_LABELS_IT,
    DIETARY_TAG_LABELS_IT,
    Languages,
    TranslationField,
)
from shared.utils.dashboard_schemas import (
    LocalizedField,
    PublicIngredient,
    PublicItem,
    PublicLabel,
    PublicMenu,
    PublicSection,
)
from shared.utils.exceptions import InvalidCodeError, NotFoundError
from shared.utils.localization import LocalizedText, TranslatedText, localize


def _field(text: LocalizedText) -> LocalizedField:
    return LocalizedField(
        value=text.value,
        language=text.language,
        translated=isinstance(text, TranslatedText),
    )


class PublicMenuService:
    """Read-only view; no ownership checks, inactive menus are hidden."""

    def __init__(self, db: Session):
        self._menus = get_menu_repository(db)
        self._items = get_item_repository(db)

    def render(self, menu_id: str, language: str) -> PublicMenu:
        if language not in Languages.ALL:
            raise InvalidCodeError("language code", language)

        menu = self._menus.get(menu_id)
        if menu is None or not menu.is_active:
            raise NotFoundError("Menu", menu_id)

        sections = [s for s in self._menus.list_sections(menu_id) if s.is_visible]
        items_by_section: dict[str, list[MenuItem]] = {s.id: [] for s in sections}
        for item in self._items.list_with_relations(list(items_by_section)):
            items_by_section[item.section_id].append(item)

        return PublicMenu(
            id=menu.id,
            language=language,
            # No menu translation table: always the default text
            name=_field(localize(menu.name, [], TranslationField.NAME, language)),
            description=_field(localize(menu.description, [], TranslationField.DESCRIPTION, language)),
            sections=[
                self._section(section, items_by_section[section.id], language)
                for section in sections
            ],
        )

    def _section(self, section: MenuSection, items: list[MenuItem], language: str) -> PublicSection:
        return PublicSection(
            id=section.id,
            name=_field(localize(section.name, section.translations, TranslationField.NAME, language)),
            description=_field(
                localize(section.description, section.translations, TranslationField.DESCRIPTION, language)
            ),
            icon=section.icon,
            items=[self._item(item, language) for item in items],
        )

    def _item(self, item: MenuItem, language: str) -> PublicItem:
        return PublicItem(
            id=item.id,
            item_type=item.item_type,
            name=_field(localize(item.name, item.translations, TranslationField.NAME, language)),
            description=_field(
                localize(item.description, item.translations, TranslationField.DESCRIPTION, language)
            ),
            price=item.price,
            currency=item.currency,
            image_url=item.image_url,
            is_available=item.is_available,
            is_featured=item.is_featured,
            calories=item.calories,
            alcohol_content=item.alcohol_content,
            serving_format=item.serving_format,
            volume_ml=item.volume_ml,
            wine_type=item.wine_type,
            vintage=item.vintage,
            beer_style=item.beer_style,
            ingredients=[self._ingredient(i, language) for i in item.ingredients],
            allergens=[self._allergen(a, language) for a in item.allergens],
            dietary_tags=[self._tag(t, language) for t in item.dietary_tags],
        )

    @staticmethod
    def _ingredient(ingredient: ItemIngredient, language: str) -> PublicIngredient:
        return PublicIngredient(
            name=_field(localize(ingredient.name, ingredient.translations, TranslationField.NAME, language)),
            is_main=ingredient.is_main,
        )

    @staticmethod
    def _allergen(allergen: ItemAllergen, language: str) -> PublicLabel:
        label = ALLERGEN_LABELS_IT.get(allergen.allergen_code, allergen.allergen_code)
        return PublicLabel(
            code=allergen.allergen_code,
            label=_field(localize(label, allergen.translations, TranslationField.DISPLAY_NAME, language)),
        )

    @staticmethod
    def _tag(tag: ItemDietaryTag, language: str) -> PublicLabel:
        label = DIETARY_TAG_LABELS_IT.get(tag.tag_code, tag.tag_code)
        return PublicLabel(
            code=tag.tag_code,
            label=_field(localize(label, tag.translations, TranslationField.DISPLAY_NAME, language)),
        )
