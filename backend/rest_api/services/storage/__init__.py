"""
Object storage access for item and restaurant images.
"""

from .client import (
    StorageClient,
    StorageClientError,
    close_storage_client,
    get_storage_client,
    storage_client,
)
from .uploads import upload_path, validate_image_upload

__all__ = [
    "StorageClient",
    "StorageClientError",
    "close_storage_client",
    "get_storage_client",
    "storage_client",
    "upload_path",
    "validate_image_upload",
]
