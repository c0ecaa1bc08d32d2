"""
Menu Repository - Data access for menus, sections and restaurant attachments.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from sqlalchemy import Select, func, select, update
from sqlalchemy.orm import Session, selectinload

from rest_api.models import (
    Menu,
    MenuItem,
    MenuSection,
    RestaurantMenu,
)
from .base import BaseRepository


class MenuRepository(ABC):
    """Interface for menu persistence."""

    @abstractmethod
    def get(self, menu_id: str) -> Menu | None: ...

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> Sequence[Menu]: ...

    @abstractmethod
    def add(self, menu: Menu) -> Menu: ...

    @abstractmethod
    def delete(self, menu: Menu) -> None: ...

    @abstractmethod
    def list_sections(self, menu_id: str) -> Sequence[MenuSection]: ...

    @abstractmethod
    def get_section(self, section_id: str) -> MenuSection | None: ...

    @abstractmethod
    def add_section(self, section: MenuSection) -> MenuSection: ...

    @abstractmethod
    def delete_section(self, section: MenuSection) -> None: ...

    @abstractmethod
    def next_section_order(self, menu_id: str) -> int: ...

    @abstractmethod
    def get_link(self, restaurant_id: str, menu_id: str) -> RestaurantMenu | None: ...

    @abstractmethod
    def add_link(self, link: RestaurantMenu) -> RestaurantMenu: ...

    @abstractmethod
    def delete_link(self, link: RestaurantMenu) -> None: ...

    @abstractmethod
    def clear_primary(self, restaurant_id: str) -> None: ...

    @abstractmethod
    def items_by_section(self, menu_id: str) -> dict[str, list[MenuItem]]: ...


class SqlMenuRepository(BaseRepository[Menu], MenuRepository):
    """
    SQLAlchemy adapter.

    Guarantees eager loading of sections and their translations.
    """

    @property
    def model(self) -> type[Menu]:
        return Menu

    def _base_query(self) -> Select:
        return select(Menu).options(
            selectinload(Menu.sections).selectinload(MenuSection.translations)
        )

    def list_by_owner(self, owner_id: str) -> Sequence[Menu]:
        query = (
            select(Menu)
            .where(Menu.owner_id == owner_id)
            .order_by(Menu.created_at, Menu.name)
        )
        return self._db.execute(query).scalars().all()

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def list_sections(self, menu_id: str) -> Sequence[MenuSection]:
        query = (
            select(MenuSection)
            .where(MenuSection.menu_id == menu_id)
            .options(selectinload(MenuSection.translations))
            .order_by(MenuSection.display_order, MenuSection.created_at)
        )
        return self._db.execute(query).scalars().all()

    def get_section(self, section_id: str) -> MenuSection | None:
        query = (
            select(MenuSection)
            .where(MenuSection.id == section_id)
            .options(selectinload(MenuSection.translations))
        )
        return self._db.scalar(query)

    def add_section(self, section: MenuSection) -> MenuSection:
        self._db.add(section)
        self._db.flush()
        return section

    def delete_section(self, section: MenuSection) -> None:
        self._db.delete(section)
        self._db.flush()

    def next_section_order(self, menu_id: str) -> int:
        current = self._db.scalar(
            select(func.max(MenuSection.display_order)).where(MenuSection.menu_id == menu_id)
        )
        return 0 if current is None else current + 1

    # -------------------------------------------------------------------------
    # Restaurant attachments
    # -------------------------------------------------------------------------

    def get_link(self, restaurant_id: str, menu_id: str) -> RestaurantMenu | None:
        return self._db.scalar(
            select(RestaurantMenu).where(
                RestaurantMenu.restaurant_id == restaurant_id,
                RestaurantMenu.menu_id == menu_id,
            )
        )

    def add_link(self, link: RestaurantMenu) -> RestaurantMenu:
        self._db.add(link)
        self._db.flush()
        return link

    def delete_link(self, link: RestaurantMenu) -> None:
        self._db.delete(link)
        self._db.flush()

    def clear_primary(self, restaurant_id: str) -> None:
        """Unset the primary flag on every attachment of the restaurant."""
        self._db.execute(
            update(RestaurantMenu)
            .where(
                RestaurantMenu.restaurant_id == restaurant_id,
                RestaurantMenu.is_primary.is_(True),
            )
            .values(is_primary=False)
            .execution_options(synchronize_session="fetch")
        )
        # The partial unique index is checked per statement; flush now
        # so the new primary row is written after the old one is cleared.
        self._db.flush()

    # -------------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------------

    def items_by_section(self, menu_id: str) -> dict[str, list[MenuItem]]:
        """Items of every section of the menu keyed by section id, in display order."""
        sections = self.list_sections(menu_id)
        grouped: dict[str, list[MenuItem]] = {section.id: [] for section in sections}
        if not grouped:
            return grouped

        query = (
            select(MenuItem)
            .where(MenuItem.section_id.in_(list(grouped)))
            .order_by(MenuItem.display_order, MenuItem.created_at)
        )
        for item in self._db.execute(query).scalars().all():
            grouped[item.section_id].append(item)
        return grouped


def get_menu_repository(db: Session) -> MenuRepository:
    """Factory used by services."""
    return SqlMenuRepository(db)
