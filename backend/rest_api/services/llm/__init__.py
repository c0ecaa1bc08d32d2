"""
Language model access: HTTP client and prompt templates.
"""

from .client import (
    LLMError,
    LLMNotConfiguredError,
    OpenAIClient,
    close_llm_client,
    get_llm_client,
    llm_client,
)
from .prompts import (
    autocomplete_messages,
    image_prompt,
    translation_messages,
)

__all__ = [
    "LLMError",
    "LLMNotConfiguredError",
    "OpenAIClient",
    "close_llm_client",
    "get_llm_client",
    "llm_client",
    "autocomplete_messages",
    "image_prompt",
    "translation_messages",
]
