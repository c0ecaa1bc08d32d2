"""
Shared dependencies for dashboard routers.

Every route here is owner-scoped: the caller's user id comes from the
JWT and services check ownership of each entity they touch.
"""

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context as current_user
from rest_api.routers._common import get_user_id
from rest_api.services.storage import StorageClient, get_storage_client

__all__ = [
    "APIRouter",
    "Depends",
    "File",
    "UploadFile",
    "status",
    "Session",
    "get_db",
    "current_user",
    "get_user_id",
    "StorageClient",
    "get_storage_client",
]
