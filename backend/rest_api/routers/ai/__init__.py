"""
AI enrichment routers - item auto-complete and image generation.
"""

from .routes import router

__all__ = ["router"]
