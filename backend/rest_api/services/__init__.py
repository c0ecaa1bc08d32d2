"""
Services module for business logic.

CLEAN ARCHITECTURE:
- domain/: Application services (restaurants, menus, items, public view)
- translation/: Menu translation workflow (collector, selection, dispatcher)
- ai/: Item auto-complete and image generation
- llm/: OpenAI HTTP client and prompt templates
- storage/: Object storage client for images

Usage:
    from rest_api.services.domain import MenuService
    service = MenuService(db)
    menus = service.list_own(user_id)
"""

from .base_service import BaseService

__all__ = [
    "BaseService",
]
