"""
Translation Service - translate one text and persist it by content kind.

Backs POST /api/translation/batch and POST /api/translation/store.

Check order for a batch request (the model is never called when one fails):
    1. text present and not blank                      -> 400
    2. language in the target allow-list ("it" is not) -> 400
    3. type and entityId present                       -> 400
    4. type is a known content kind                    -> 400
    5. type has translation storage (menu kinds don't) -> 422
    6. owning entity exists / belongs to the caller    -> 404 / 403
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.repositories import get_translation_repository
from rest_api.repositories.translation import ALLERGEN, INGREDIENT, ITEM, SECTION, TranslationTarget
from rest_api.services.base_service import BaseService
from rest_api.services.llm import LLMError, LLMNotConfiguredError, OpenAIClient, translation_messages
from shared.config.constants import ContentKind, ErrorMessages, Languages, TranslationField
from shared.config.logging import translation_logger as logger, truncate_text
from shared.config.settings import settings
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import (
    DatabaseError,
    InternalError,
    NotFoundError,
    OwnershipError,
    UnsupportedContentKindError,
    UpstreamError,
    ValidationError,
)
from shared.utils.validators import is_blank


# content kind -> (translation family, field name)
KIND_STORAGE: dict[str, tuple[TranslationTarget, str]] = {
    ContentKind.SECTION_NAME: (SECTION, TranslationField.NAME),
    ContentKind.SECTION_DESCRIPTION: (SECTION, TranslationField.DESCRIPTION),
    ContentKind.ITEM_NAME: (ITEM, TranslationField.NAME),
    ContentKind.ITEM_DESCRIPTION: (ITEM, TranslationField.DESCRIPTION),
    ContentKind.INGREDIENT: (INGREDIENT, TranslationField.NAME),
    ContentKind.ALLERGEN: (ALLERGEN, TranslationField.DISPLAY_NAME),
}


def validate_text_and_language(text: str | None, language_code: str | None) -> None:
    if is_blank(text):
        raise ValidationError(ErrorMessages.EMPTY_TEXT)
    if language_code not in Languages.TARGETS:
        raise ValidationError(ErrorMessages.INVALID_LANGUAGE, language_code=language_code)


def resolve_storage(kind: str | None, entity_id: str | None) -> tuple[TranslationTarget, str]:
    """Translation family and field for a content kind."""
    if not kind or not entity_id:
        raise ValidationError(ErrorMessages.MISSING_TYPE_OR_ENTITY)
    if kind not in ContentKind.ALL:
        raise ValidationError(ErrorMessages.INVALID_CONTENT_KIND, type=kind)
    if kind in ContentKind.MENU_KINDS:
        raise UnsupportedContentKindError(kind, entity_id=entity_id)
    return KIND_STORAGE[kind]


class TranslationService(BaseService):
    """Translate with the language model, then upsert the result."""

    def __init__(self, db: Session, llm: OpenAIClient):
        super().__init__(db)
        self._translations = get_translation_repository(db)
        self._llm = llm

    async def translate(self, text: str, language_code: str) -> str:
        """
        Run the translation prompt.

        Raises:
            InternalError: No API key configured (500).
            UpstreamError: Provider failure or empty output (502).
        """
        try:
            translated = await self._llm.chat(
                translation_messages(text, language_code),
                model=settings.translation_model,
                temperature=settings.translation_temperature,
            )
        except LLMNotConfiguredError:
            raise InternalError(ErrorMessages.LLM_NOT_CONFIGURED)
        except LLMError as e:
            raise UpstreamError(ErrorMessages.LLM_FAILED, error=str(e), upstream_status=e.status_code)

        if not translated:
            raise UpstreamError(ErrorMessages.LLM_EMPTY_OUTPUT, language_code=language_code)
        return translated

    async def translate_only(self, text: str | None, language_code: str | None) -> str:
        validate_text_and_language(text, language_code)
        return await self.translate(text, language_code)

    async def translate_and_store(
        self,
        user_id: str,
        text: str | None,
        language_code: str | None,
        kind: str | None,
        entity_id: str | None,
        menu_id: str | None = None,
    ) -> str:
        """
        Translate one unit into one language and upsert the result.

        Returns:
            The stored translation.
        """
        validate_text_and_language(text, language_code)
        target, field_name = resolve_storage(kind, entity_id)

        owner_id = self._translations.owner_of(target, entity_id)
        if owner_id is None:
            raise NotFoundError(target.name.capitalize(), entity_id)
        if owner_id != user_id:
            raise OwnershipError(target.name.capitalize(), entity_id, user_id=user_id)

        translated = await self.translate(text, language_code)

        # A failed write discards the generated text
        try:
            self._translations.upsert(target, entity_id, language_code, field_name, translated)
            safe_commit(self._db)
        except SQLAlchemyError as e:
            raise DatabaseError(
                "translation save",
                kind=kind,
                entity_id=entity_id,
                language_code=language_code,
                error=str(e),
            )

        logger.info(
            "Translation stored",
            kind=kind,
            entity_id=entity_id,
            language_code=language_code,
            menu_id=menu_id,
            text=truncate_text(translated, 60),
        )
        return translated
