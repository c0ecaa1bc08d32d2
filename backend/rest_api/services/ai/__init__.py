"""
AI enrichment: item auto-complete and image generation.
"""

from .autocomplete_service import AutocompleteService, sanitize_suggestion
from .image_service import ImageService

__all__ = [
    "AutocompleteService",
    "ImageService",
    "sanitize_suggestion",
]
