"""
Translation routers - /api/translation/*
"""

from .routes import router

__all__ = ["router"]
