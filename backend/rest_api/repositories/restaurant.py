"""
Restaurant Repository - Data access for restaurants, their translations,
social handles and menu attachments.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from sqlalchemy import Select, delete, select
from sqlalchemy.orm import Session, selectinload

from rest_api.models import (
    Restaurant,
    RestaurantMenu,
    RestaurantSocial,
    RestaurantTranslation,
)
from .base import BaseRepository, upsert


class RestaurantRepository(ABC):
    """Interface for restaurant persistence."""

    @abstractmethod
    def get(self, restaurant_id: str) -> Restaurant | None: ...

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> Sequence[Restaurant]: ...

    @abstractmethod
    def add(self, restaurant: Restaurant) -> Restaurant: ...

    @abstractmethod
    def delete(self, restaurant: Restaurant) -> None: ...

    @abstractmethod
    def upsert_translation(
        self, restaurant_id: str, language_code: str, field_name: str, value: str
    ) -> None: ...

    @abstractmethod
    def delete_translation(self, restaurant_id: str, language_code: str, field_name: str) -> bool: ...

    @abstractmethod
    def upsert_social(self, restaurant_id: str, platform: str, handle: str) -> None: ...

    @abstractmethod
    def delete_social(self, restaurant_id: str, platform: str) -> bool: ...

    @abstractmethod
    def list_menu_links(self, restaurant_id: str) -> Sequence[RestaurantMenu]: ...


class SqlRestaurantRepository(BaseRepository[Restaurant], RestaurantRepository):
    """
    SQLAlchemy adapter.

    Guarantees eager loading of translations and socials.
    """

    @property
    def model(self) -> type[Restaurant]:
        return Restaurant

    def _base_query(self) -> Select:
        return (
            select(Restaurant)
            .options(selectinload(Restaurant.translations))
            .options(selectinload(Restaurant.socials))
        )

    def list_by_owner(self, owner_id: str) -> Sequence[Restaurant]:
        query = (
            self._base_query()
            .where(Restaurant.owner_id == owner_id)
            .order_by(Restaurant.created_at, Restaurant.name)
        )
        return self._db.execute(query).scalars().unique().all()

    def upsert_translation(
        self, restaurant_id: str, language_code: str, field_name: str, value: str
    ) -> None:
        upsert(
            self._db,
            RestaurantTranslation,
            {
                "restaurant_id": restaurant_id,
                "language_code": language_code,
                "field_name": field_name,
                "field_value": value,
            },
            conflict_columns=["restaurant_id", "language_code", "field_name"],
            update_columns=["field_value"],
        )

    def delete_translation(self, restaurant_id: str, language_code: str, field_name: str) -> bool:
        result = self._db.execute(
            delete(RestaurantTranslation).where(
                RestaurantTranslation.restaurant_id == restaurant_id,
                RestaurantTranslation.language_code == language_code,
                RestaurantTranslation.field_name == field_name,
            )
        )
        return result.rowcount > 0

    def upsert_social(self, restaurant_id: str, platform: str, handle: str) -> None:
        upsert(
            self._db,
            RestaurantSocial,
            {"restaurant_id": restaurant_id, "platform": platform, "handle": handle},
            conflict_columns=["restaurant_id", "platform"],
            update_columns=["handle"],
        )

    def delete_social(self, restaurant_id: str, platform: str) -> bool:
        result = self._db.execute(
            delete(RestaurantSocial).where(
                RestaurantSocial.restaurant_id == restaurant_id,
                RestaurantSocial.platform == platform,
            )
        )
        return result.rowcount > 0

    def list_menu_links(self, restaurant_id: str) -> Sequence[RestaurantMenu]:
        query = (
            select(RestaurantMenu)
            .where(RestaurantMenu.restaurant_id == restaurant_id)
            .options(selectinload(RestaurantMenu.menu))
            .order_by(RestaurantMenu.display_order)
        )
        return self._db.execute(query).scalars().all()


def get_restaurant_repository(db: Session) -> RestaurantRepository:
    """Factory used by services."""
    return SqlRestaurantRepository(db)
