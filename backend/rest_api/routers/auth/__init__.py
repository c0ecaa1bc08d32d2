"""
Authentication routers - /api/auth/*
Handles owner sign-up, login and user info.
"""

from .routes import router

__all__ = ["router"]
