"""
Item auto-complete: description, story, ingredients, allergens and
calories for a dish name, produced by a JSON-mode chat completion and
sanitised before it reaches the client.
"""

from __future__ import annotations

import json
from typing import Any

from rest_api.services.llm import LLMError, LLMNotConfiguredError, OpenAIClient, autocomplete_messages
from shared.config.constants import ALLERGEN_CODES, ErrorMessages, ItemType, Limits
from shared.config.logging import ai_logger as logger
from shared.config.settings import settings
from shared.utils.dashboard_schemas import AutocompleteResponse
from shared.utils.exceptions import InternalError, InvalidCodeError, UpstreamError, ValidationError
from shared.utils.validators import is_blank, sanitize_text


def _clamp_calories(value: Any) -> int:
    try:
        calories = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        calories = 0
    return max(Limits.MIN_CALORIES, min(Limits.MAX_CALORIES, calories))


def sanitize_suggestion(data: dict[str, Any]) -> AutocompleteResponse:
    """
    Coerce raw model output into a safe suggestion.

    - description and about are trimmed strings
    - ingredients: trimmed, non-empty, at most MAX_INGREDIENTS
    - allergens: only known codes, first occurrence kept
    - calories: integer clamped to MIN_CALORIES..MAX_CALORIES

    Raises:
        UpstreamError: description shorter than MIN_DESCRIPTION_CHARS.
    """
    description = sanitize_text(str(data.get("description") or ""))
    if len(description) < Limits.MIN_DESCRIPTION_CHARS:
        raise UpstreamError("The model returned an invalid description", description=description)

    raw_ingredients = data.get("ingredients")
    ingredients = [
        sanitize_text(str(name), Limits.MAX_NAME_LENGTH)
        for name in (raw_ingredients if isinstance(raw_ingredients, list) else [])
    ]
    ingredients = [name for name in ingredients if name][: Limits.MAX_INGREDIENTS]

    raw_allergens = data.get("allergens")
    allergens = list(dict.fromkeys(
        code for code in (raw_allergens if isinstance(raw_allergens, list) else [])
        if isinstance(code, str) and code in ALLERGEN_CODES
    ))

    return AutocompleteResponse(
        description=description,
        about=sanitize_text(str(data.get("about") or "")),
        ingredients=ingredients,
        allergens=allergens,
        calories=_clamp_calories(data.get("calories")),
    )


class AutocompleteService:
    """Stateless; one instance per request."""

    def __init__(self, llm: OpenAIClient):
        self._llm = llm

    async def suggest(self, item_name: str | None, item_type: str | None = None) -> AutocompleteResponse:
        if is_blank(item_name):
            raise ValidationError("Item name is required")
        item_type = item_type or ItemType.FOOD
        if item_type not in ItemType.ALL:
            raise InvalidCodeError("item type", item_type)

        try:
            content = await self._llm.chat(
                autocomplete_messages(item_name.strip(), item_type),
                model=settings.autocomplete_model,
                temperature=settings.autocomplete_temperature,
                json_mode=True,
            )
        except LLMNotConfiguredError:
            raise InternalError(ErrorMessages.LLM_NOT_CONFIGURED)
        except LLMError as e:
            raise UpstreamError(ErrorMessages.LLM_FAILED, error=str(e), upstream_status=e.status_code)

        if not content:
            raise UpstreamError("The model returned an empty response", item_name=item_name)
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise UpstreamError("The model returned invalid JSON", error=str(e))
        if not isinstance(data, dict):
            raise UpstreamError("The model returned invalid JSON", payload_type=type(data).__name__)

        suggestion = sanitize_suggestion(data)
        logger.info(
            "Autocomplete suggestion",
            item_name=item_name,
            item_type=item_type,
            ingredients=len(suggestion.ingredients),
            allergens=suggestion.allergens,
        )
        return suggestion
