"""
AI image generation for menu items.

A reference image, when given, is fed to the variations endpoint first;
any failure there falls back to plain text-to-image generation. The
result is stored in the item-images bucket and its public URL returned.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from rest_api.services.domain.item_service import ItemService
from rest_api.services.llm import LLMError, LLMNotConfiguredError, OpenAIClient, image_prompt
from rest_api.services.storage import StorageClient, StorageClientError
from rest_api.services.storage.uploads import timestamp_ms
from shared.config.constants import (
    IMAGE_BACKGROUNDS,
    IMAGE_QUALITIES,
    IMAGE_SIZES,
    IMAGE_STYLE_MODIFIERS,
    ErrorMessages,
    Limits,
)
from shared.config.logging import ai_logger as logger
from shared.config.settings import settings
from shared.utils.dashboard_schemas import ImageGenerateRequest, ImageGenerateResponse
from shared.utils.exceptions import (
    ForbiddenError,
    InternalError,
    InvalidCodeError,
    StorageError,
    ValidationError,
)
from shared.utils.validators import is_blank, validate_image_url

DEFAULT_SIZE = "1024x1024"
DEFAULT_QUALITY = "low"
DEFAULT_BACKGROUND = "auto"
DEFAULT_STYLE_LABEL = "default"


class ImageService:
    """Generate, store and return one item image."""

    def __init__(self, db: Session, llm: OpenAIClient, storage: StorageClient):
        self._db = db
        self._llm = llm
        self._storage = storage

    def _validate(self, request: ImageGenerateRequest, user_id: str) -> str | None:
        """Returns the validated reference URL."""
        if is_blank(request.prompt):
            raise ValidationError("Prompt is required")
        if len(request.prompt) > Limits.MAX_PROMPT_LENGTH:
            raise ValidationError(f"Prompt too long (max {Limits.MAX_PROMPT_LENGTH} characters)")
        if not request.user_id:
            raise ValidationError("User ID is required")
        if request.user_id != user_id:
            raise ForbiddenError("generate images for another user", user_id=user_id)

        if request.style is not None and request.style not in IMAGE_STYLE_MODIFIERS:
            raise InvalidCodeError("image style", request.style)
        if request.size is not None and request.size not in IMAGE_SIZES:
            raise InvalidCodeError("image size", request.size)
        if request.quality is not None and request.quality not in IMAGE_QUALITIES:
            raise InvalidCodeError("image quality", request.quality)
        if request.background is not None and request.background not in IMAGE_BACKGROUNDS:
            raise InvalidCodeError("image background", request.background)

        if request.item_id:
            ItemService(self._db).get_owned(request.item_id, user_id)

        try:
            return validate_image_url(request.reference_image_url)
        except ValueError as e:
            raise ValidationError(str(e), field="referenceImageUrl")

    async def generate(self, request: ImageGenerateRequest, user_id: str) -> ImageGenerateResponse:
        reference_url = self._validate(request, user_id)
        size = request.size or DEFAULT_SIZE
        prompt = image_prompt(request.prompt, request.style)

        try:
            image = None
            if reference_url:
                image = await self._variation(reference_url, size, user_id)
            if image is None:
                image = await self._llm.generate_image(
                    prompt,
                    size=size,
                    quality=request.quality or DEFAULT_QUALITY,
                    background=request.background or DEFAULT_BACKGROUND,
                    model=settings.image_model,
                )
        except LLMNotConfiguredError:
            raise InternalError(ErrorMessages.LLM_NOT_CONFIGURED)
        except LLMError as e:
            raise InternalError("Image generation failed", error=str(e), upstream_status=e.status_code)

        path = f"generated/{user_id}/{request.item_id or 'temp'}/{timestamp_ms()}-ai.png"
        try:
            url = await self._storage.upload(settings.item_images_bucket, path, image, "image/png")
        except StorageClientError as e:
            raise StorageError("generated image upload", path=path, error=str(e))

        logger.info(
            "Item image generated",
            user_id=user_id,
            item_id=request.item_id,
            style=request.style,
            from_reference=bool(reference_url),
            path=path,
        )
        return ImageGenerateResponse(
            image_url=url,
            prompt=prompt,
            style=request.style or DEFAULT_STYLE_LABEL,
        )

    async def _variation(self, reference_url: str, size: str, user_id: str) -> bytes | None:
        """Variation of the reference image, or None to fall back to text generation."""
        try:
            reference = await self._llm.download(reference_url)
            return await self._llm.create_variation(
                reference, size=size, model=settings.image_model, user=user_id
            )
        except LLMNotConfiguredError:
            raise
        except LLMError as e:
            logger.warning("Image variation failed, falling back to generation", error=str(e))
            return None
