"""
Restaurant Service - Clean Architecture Implementation.

Handles restaurant profiles, their translated texts, social handles and
cover images.

Usage:
    from rest_api.services.domain import RestaurantService

    service = RestaurantService(db)
    restaurants = service.list_own(user_id)
    restaurant = service.create(data, user_id)
"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy.orm import Session

from rest_api.models import Restaurant, RestaurantMenu
from rest_api.repositories import get_restaurant_repository
from rest_api.services.base_service import BaseService
from rest_api.services.storage import (
    StorageClient,
    StorageClientError,
    upload_path,
    validate_image_upload,
)
from shared.config.constants import (
    RESTAURANT_TYPES,
    SOCIAL_PLATFORMS,
    Languages,
    TranslationField,
)
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.utils.exceptions import (
    InvalidCodeError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from shared.utils.validators import is_blank, validate_image_url

logger = get_logger(__name__)


class RestaurantService(BaseService):
    """
    Service for restaurant management.

    Business rules:
    - A restaurant belongs to exactly one owner
    - Type must be one of the known restaurant types
    - Only description and about are translatable
    - One handle per social platform
    """

    def __init__(self, db: Session, storage: StorageClient | None = None):
        super().__init__(db)
        self._restaurants = get_restaurant_repository(db)
        self._storage = storage

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_owned(self, restaurant_id: str, user_id: str) -> Restaurant:
        restaurant = self._restaurants.get(restaurant_id)
        return self._ensure_owned(
            restaurant,
            restaurant.owner_id if restaurant else None,
            user_id,
            "Restaurant",
            restaurant_id,
        )

    def list_own(self, user_id: str) -> Sequence[Restaurant]:
        return self._restaurants.list_by_owner(user_id)

    def list_menus(self, restaurant_id: str, user_id: str) -> Sequence[RestaurantMenu]:
        """Attached menus ordered by display order."""
        self.get_owned(restaurant_id, user_id)
        return self._restaurants.list_menu_links(restaurant_id)

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create(self, data: dict[str, Any], user_id: str) -> Restaurant:
        self._validate_type(data["type"])
        data["image_url"] = self._validate_url(data.get("image_url"))

        restaurant = self._restaurants.add(Restaurant(owner_id=user_id, **data))
        self._commit("restaurant creation", user_id=user_id)
        logger.info("Restaurant created", restaurant_id=restaurant.id, user_id=user_id)
        return self.get_owned(restaurant.id, user_id)

    def update(self, restaurant_id: str, data: dict[str, Any], user_id: str) -> Restaurant:
        restaurant = self.get_owned(restaurant_id, user_id)
        if "type" in data:
            if data["type"] is None:
                raise ValidationError("Restaurant type cannot be empty")
            self._validate_type(data["type"])
        if "name" in data and data["name"] is None:
            raise ValidationError("Restaurant name cannot be empty")
        if "image_url" in data:
            data["image_url"] = self._validate_url(data["image_url"])

        for key, value in data.items():
            setattr(restaurant, key, value)

        self._commit("restaurant update", restaurant_id=restaurant_id)
        self._db.refresh(restaurant)
        return restaurant

    async def delete(self, restaurant_id: str, user_id: str) -> None:
        restaurant = self.get_owned(restaurant_id, user_id)
        image_url = restaurant.image_url

        self._restaurants.delete(restaurant)
        self._commit("restaurant deletion", restaurant_id=restaurant_id)
        logger.info("Restaurant deleted", restaurant_id=restaurant_id, user_id=user_id)

        await self._remove_image(image_url)

    # =========================================================================
    # Image
    # =========================================================================

    async def upload_image(
        self,
        restaurant_id: str,
        user_id: str,
        data: bytes,
        content_type: str | None,
    ) -> tuple[str, str]:
        """
        Store a new cover image and point the restaurant at it.
        The previous stored image is removed afterwards.

        Returns:
            (public URL, object path)
        """
        restaurant = self.get_owned(restaurant_id, user_id)
        extension = validate_image_upload(content_type, data)
        storage = self._require_storage()

        path = upload_path(user_id, restaurant_id, extension=extension)
        try:
            url = await storage.upload(settings.restaurant_images_bucket, path, data, content_type)
        except StorageClientError as e:
            raise StorageError("restaurant image upload", restaurant_id=restaurant_id, error=str(e))

        previous = restaurant.image_url
        restaurant.image_url = url
        self._commit("restaurant image update", restaurant_id=restaurant_id)

        await self._remove_image(previous)
        return url, path

    async def delete_image(self, restaurant_id: str, user_id: str) -> None:
        restaurant = self.get_owned(restaurant_id, user_id)
        if not restaurant.image_url:
            raise NotFoundError("Restaurant image", restaurant_id)

        previous = restaurant.image_url
        restaurant.image_url = None
        self._commit("restaurant image removal", restaurant_id=restaurant_id)

        await self._remove_image(previous)

    async def _remove_image(self, url: str | None) -> None:
        """Best effort: a stale object is logged, never raised."""
        if self._storage is None:
            return
        path = self._storage.path_from_public_url(settings.restaurant_images_bucket, url)
        if path is None:
            return
        try:
            await self._storage.remove(settings.restaurant_images_bucket, [path])
        except StorageClientError as e:
            logger.warning("Could not remove restaurant image", path=path, error=str(e))

    def _require_storage(self) -> StorageClient:
        if self._storage is None:
            raise StorageError("image upload", reason="storage client not configured")
        return self._storage

    # =========================================================================
    # Translations and Socials
    # =========================================================================

    def upsert_translation(
        self,
        restaurant_id: str,
        user_id: str,
        language_code: str,
        field_name: str,
        value: str,
    ) -> Restaurant:
        self.get_owned(restaurant_id, user_id)
        if language_code not in Languages.TARGETS:
            raise InvalidCodeError("language code", language_code)
        if field_name not in TranslationField.RESTAURANT_FIELDS:
            raise InvalidCodeError("restaurant translation field", field_name)
        if is_blank(value):
            raise ValidationError("Translation value is required")

        self._restaurants.upsert_translation(restaurant_id, language_code, field_name, value.strip())
        self._commit("restaurant translation", restaurant_id=restaurant_id, language_code=language_code)
        return self.get_owned(restaurant_id, user_id)

    def delete_translation(
        self, restaurant_id: str, user_id: str, language_code: str, field_name: str
    ) -> None:
        self.get_owned(restaurant_id, user_id)
        if not self._restaurants.delete_translation(restaurant_id, language_code, field_name):
            raise NotFoundError("Restaurant translation", f"{language_code}/{field_name}")
        self._commit("restaurant translation removal", restaurant_id=restaurant_id)

    def upsert_social(self, restaurant_id: str, user_id: str, platform: str, handle: str) -> Restaurant:
        self.get_owned(restaurant_id, user_id)
        if platform not in SOCIAL_PLATFORMS:
            raise InvalidCodeError("social platform", platform)
        if is_blank(handle):
            raise ValidationError("Social handle is required")

        self._restaurants.upsert_social(restaurant_id, platform, handle.strip())
        self._commit("restaurant social update", restaurant_id=restaurant_id, platform=platform)
        return self.get_owned(restaurant_id, user_id)

    def delete_social(self, restaurant_id: str, user_id: str, platform: str) -> None:
        self.get_owned(restaurant_id, user_id)
        if not self._restaurants.delete_social(restaurant_id, platform):
            raise NotFoundError("Social handle", platform)
        self._commit("restaurant social removal", restaurant_id=restaurant_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _validate_type(restaurant_type: str) -> None:
        if restaurant_type not in RESTAURANT_TYPES:
            raise InvalidCodeError("restaurant type", restaurant_type)

    @staticmethod
    def _validate_url(url: str | None) -> str | None:
        try:
            return validate_image_url(url)
        except ValueError as e:
            raise ValidationError(str(e), field="image_url")
