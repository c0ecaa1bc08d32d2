"""
Item Repository - Data access for menu items and their relations.
Eager loading keeps the collector and the public menu free of N+1 queries.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from sqlalchemy import Select, func, select, update
from sqlalchemy.orm import Session, selectinload

from rest_api.models import (
    ItemAllergen,
    ItemDietaryTag,
    ItemIngredient,
    MenuItem,
)
from .base import BaseRepository


class ItemRepository(ABC):
    """Interface for item persistence."""

    @abstractmethod
    def get(self, item_id: str) -> MenuItem | None: ...

    @abstractmethod
    def get_with_relations(self, item_id: str) -> MenuItem | None: ...

    @abstractmethod
    def list_by_section(self, section_id: str) -> Sequence[MenuItem]: ...

    @abstractmethod
    def add(self, item: MenuItem) -> MenuItem: ...

    @abstractmethod
    def delete(self, item: MenuItem) -> None: ...

    @abstractmethod
    def next_display_order(self, section_id: str) -> int: ...

    @abstractmethod
    def shift_display_orders(self, section_id: str, from_order: int) -> None: ...

    @abstractmethod
    def get_ingredient(self, ingredient_id: str) -> ItemIngredient | None: ...

    @abstractmethod
    def add_ingredient(self, item_id: str, name: str, display_order: int, is_main: bool = False) -> ItemIngredient: ...

    @abstractmethod
    def remove_ingredient(self, ingredient: ItemIngredient) -> None: ...

    @abstractmethod
    def clear_ingredients(self, item_id: str) -> None: ...

    @abstractmethod
    def add_allergen(self, item_id: str, code: str) -> ItemAllergen: ...

    @abstractmethod
    def remove_allergen(self, item_id: str, code: str) -> bool: ...

    @abstractmethod
    def add_dietary_tag(self, item_id: str, code: str) -> ItemDietaryTag: ...

    @abstractmethod
    def remove_dietary_tag(self, item_id: str, code: str) -> bool: ...


class SqlItemRepository(BaseRepository[MenuItem], ItemRepository):
    """
    SQLAlchemy adapter.

    get_with_relations() loads:
    - translations
    - ingredients -> translations
    - allergens -> translations
    - dietary_tags -> translations
    """

    @property
    def model(self) -> type[MenuItem]:
        return MenuItem

    def _relations_query(self) -> Select:
        return (
            select(MenuItem)
            .options(selectinload(MenuItem.translations))
            .options(selectinload(MenuItem.ingredients).selectinload(ItemIngredient.translations))
            .options(selectinload(MenuItem.allergens).selectinload(ItemAllergen.translations))
            .options(selectinload(MenuItem.dietary_tags).selectinload(ItemDietaryTag.translations))
        )

    def get_with_relations(self, item_id: str) -> MenuItem | None:
        return self._db.scalar(self._relations_query().where(MenuItem.id == item_id))

    def list_by_section(self, section_id: str) -> Sequence[MenuItem]:
        query = (
            select(MenuItem)
            .where(MenuItem.section_id == section_id)
            .order_by(MenuItem.display_order, MenuItem.created_at)
        )
        return self._db.execute(query).scalars().all()

    def list_with_relations(self, section_ids: list[str]) -> Sequence[MenuItem]:
        if not section_ids:
            return []
        query = (
            self._relations_query()
            .where(MenuItem.section_id.in_(section_ids))
            .order_by(MenuItem.display_order, MenuItem.created_at)
        )
        return self._db.execute(query).scalars().unique().all()

    def next_display_order(self, section_id: str) -> int:
        current = self._db.scalar(
            select(func.max(MenuItem.display_order)).where(MenuItem.section_id == section_id)
        )
        return 0 if current is None else current + 1

    def shift_display_orders(self, section_id: str, from_order: int) -> None:
        """Move every item at or after from_order one slot down."""
        self._db.execute(
            update(MenuItem)
            .where(MenuItem.section_id == section_id, MenuItem.display_order >= from_order)
            .values(display_order=MenuItem.display_order + 1)
            .execution_options(synchronize_session="fetch")
        )

    # -------------------------------------------------------------------------
    # Ingredients
    # -------------------------------------------------------------------------

    def get_ingredient(self, ingredient_id: str) -> ItemIngredient | None:
        return self._db.get(ItemIngredient, ingredient_id)

    def add_ingredient(self, item_id: str, name: str, display_order: int, is_main: bool = False) -> ItemIngredient:
        ingredient = ItemIngredient(item_id=item_id, name=name, display_order=display_order, is_main=is_main)
        self._db.add(ingredient)
        self._db.flush()
        return ingredient

    def remove_ingredient(self, ingredient: ItemIngredient) -> None:
        self._db.delete(ingredient)
        self._db.flush()

    def clear_ingredients(self, item_id: str) -> None:
        for ingredient in self._db.scalars(
            select(ItemIngredient).where(ItemIngredient.item_id == item_id)
        ).all():
            self._db.delete(ingredient)
        self._db.flush()

    def next_ingredient_order(self, item_id: str) -> int:
        current = self._db.scalar(
            select(func.max(ItemIngredient.display_order)).where(ItemIngredient.item_id == item_id)
        )
        return 0 if current is None else current + 1

    # -------------------------------------------------------------------------
    # Allergens and dietary tags
    # -------------------------------------------------------------------------

    def has_allergen(self, item_id: str, code: str) -> bool:
        return self._db.scalar(
            select(ItemAllergen.id).where(
                ItemAllergen.item_id == item_id, ItemAllergen.allergen_code == code
            )
        ) is not None

    def add_allergen(self, item_id: str, code: str) -> ItemAllergen:
        allergen = ItemAllergen(item_id=item_id, allergen_code=code)
        self._db.add(allergen)
        self._db.flush()
        return allergen

    def remove_allergen(self, item_id: str, code: str) -> bool:
        allergen = self._db.scalar(
            select(ItemAllergen).where(
                ItemAllergen.item_id == item_id, ItemAllergen.allergen_code == code
            )
        )
        if allergen is None:
            return False
        self._db.delete(allergen)
        self._db.flush()
        return True

    def has_dietary_tag(self, item_id: str, code: str) -> bool:
        return self._db.scalar(
            select(ItemDietaryTag.id).where(
                ItemDietaryTag.item_id == item_id, ItemDietaryTag.tag_code == code
            )
        ) is not None

    def add_dietary_tag(self, item_id: str, code: str) -> ItemDietaryTag:
        tag = ItemDietaryTag(item_id=item_id, tag_code=code)
        self._db.add(tag)
        self._db.flush()
        return tag

    def remove_dietary_tag(self, item_id: str, code: str) -> bool:
        tag = self._db.scalar(
            select(ItemDietaryTag).where(
                ItemDietaryTag.item_id == item_id, ItemDietaryTag.tag_code == code
            )
        )
        if tag is None:
            return False
        self._db.delete(tag)
        self._db.flush()
        return True


def get_item_repository(db: Session) -> SqlItemRepository:
    """Factory used by services."""
    return SqlItemRepository(db)
