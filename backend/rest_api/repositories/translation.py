"""
Translation Repository - upsert/delete across every translation family.

Each family is described by a TranslationTarget: its model, the column
pointing at the owning entity, the unique key used for upserts and where
the text is stored.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from rest_api.models import (
    DietaryTagTranslation,
    ItemAllergen,
    ItemAllergenTranslation,
    ItemDietaryTag,
    ItemIngredient,
    ItemIngredientTranslation,
    Menu,
    MenuItem,
    MenuItemTranslation,
    MenuSection,
    MenuSectionTranslation,
    Restaurant,
    RestaurantTranslation,
)
from .base import upsert


@dataclass(frozen=True)
class TranslationTarget:
    """Where one family of translations lives."""

    name: str
    model: type
    entity_column: str
    # Rows keyed by field_name store text in field_value; single-field
    # families store it in value_column and have no field_name column.
    value_column: str
    keyed_by_field: bool

    @property
    def conflict_columns(self) -> list[str]:
        if self.keyed_by_field:
            return [self.entity_column, "language_code", "field_name"]
        return [self.entity_column, "language_code"]


RESTAURANT = TranslationTarget("restaurant", RestaurantTranslation, "restaurant_id", "field_value", True)
SECTION = TranslationTarget("section", MenuSectionTranslation, "section_id", "field_value", True)
ITEM = TranslationTarget("item", MenuItemTranslation, "item_id", "field_value", True)
INGREDIENT = TranslationTarget("ingredient", ItemIngredientTranslation, "ingredient_id", "name", False)
ALLERGEN = TranslationTarget("allergen", ItemAllergenTranslation, "allergen_id", "display_name", False)
DIETARY_TAG = TranslationTarget("dietary_tag", DietaryTagTranslation, "tag_id", "display_name", False)

TARGETS: dict[str, TranslationTarget] = {
    t.name: t for t in (RESTAURANT, SECTION, ITEM, INGREDIENT, ALLERGEN, DIETARY_TAG)
}


class TranslationRepository(ABC):
    """Interface for translation persistence."""

    @abstractmethod
    def upsert(
        self,
        target: TranslationTarget,
        entity_id: str,
        language_code: str,
        field_name: str,
        value: str,
    ) -> None: ...

    @abstractmethod
    def delete(
        self,
        target: TranslationTarget,
        entity_id: str,
        language_code: str,
        field_name: str | None = None,
    ) -> bool: ...

    @abstractmethod
    def owner_of(self, target: TranslationTarget, entity_id: str) -> str | None: ...


class SqlTranslationRepository(TranslationRepository):
    """SQLAlchemy adapter using native INSERT ... ON CONFLICT upserts."""

    def __init__(self, db: Session):
        self._db = db

    def upsert(
        self,
        target: TranslationTarget,
        entity_id: str,
        language_code: str,
        field_name: str,
        value: str,
    ) -> None:
        values = {target.entity_column: entity_id, "language_code": language_code}
        if target.keyed_by_field:
            values["field_name"] = field_name
        values[target.value_column] = value

        upsert(
            self._db,
            target.model,
            values,
            conflict_columns=target.conflict_columns,
            update_columns=[target.value_column],
        )

    def delete(
        self,
        target: TranslationTarget,
        entity_id: str,
        language_code: str,
        field_name: str | None = None,
    ) -> bool:
        stmt = delete(target.model).where(
            getattr(target.model, target.entity_column) == entity_id,
            target.model.language_code == language_code,
        )
        if target.keyed_by_field and field_name is not None:
            stmt = stmt.where(target.model.field_name == field_name)
        return self._db.execute(stmt).rowcount > 0

    def owner_of(self, target: TranslationTarget, entity_id: str) -> str | None:
        """
        Owner user id of the entity a translation would belong to.
        Returns None when the entity does not exist.
        """
        if target is RESTAURANT:
            query = select(Restaurant.owner_id).where(Restaurant.id == entity_id)
        elif target is SECTION:
            query = (
                select(Menu.owner_id)
                .join(MenuSection, MenuSection.menu_id == Menu.id)
                .where(MenuSection.id == entity_id)
            )
        else:
            parent = {
                ITEM.name: (MenuItem, None),
                INGREDIENT.name: (ItemIngredient, ItemIngredient.item_id),
                ALLERGEN.name: (ItemAllergen, ItemAllergen.item_id),
                DIETARY_TAG.name: (ItemDietaryTag, ItemDietaryTag.item_id),
            }
            model, item_fk = parent[target.name]
            query = (
                select(Menu.owner_id)
                .join(MenuSection, MenuSection.menu_id == Menu.id)
                .join(MenuItem, MenuItem.section_id == MenuSection.id)
            )
            if item_fk is None:
                query = query.where(MenuItem.id == entity_id)
            else:
                query = query.join(model, item_fk == MenuItem.id).where(model.id == entity_id)
        return self._db.scalar(query)


def get_translation_repository(db: Session) -> TranslationRepository:
    """Factory used by services."""
    return SqlTranslationRepository(db)
