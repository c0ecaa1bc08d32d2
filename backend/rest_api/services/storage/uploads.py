"""
Checks and naming for owner-uploaded images.
"""

import time

from shared.config.constants import ALLOWED_IMAGE_CONTENT_TYPES
from shared.config.settings import settings
from shared.utils.exceptions import ValidationError

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def timestamp_ms() -> int:
    return int(time.time() * 1000)


def validate_image_upload(content_type: str | None, data: bytes) -> str:
    """
    Reject empty, oversized or non-image uploads.

    Returns:
        File extension matching the content type.
    """
    if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
        raise ValidationError(
            "Unsupported image type; use JPEG, PNG, WebP or GIF",
            content_type=content_type,
        )
    if not data:
        raise ValidationError("Uploaded file is empty")
    if len(data) > settings.max_upload_bytes:
        raise ValidationError(
            f"Image too large (max {settings.max_upload_bytes // (1024 * 1024)} MB)",
            size=len(data),
        )
    return _EXTENSIONS[content_type]


def upload_path(*segments: str, extension: str) -> str:
    """{segment}/.../{timestamp}.{extension}"""
    return "/".join([*segments, f"{timestamp_ms()}.{extension}"])
