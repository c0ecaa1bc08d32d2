"""
Utilities module: Exceptions, validators, localization.
"""

from shared.utils.exceptions import (
    NotFoundError,
    ForbiddenError,
    ValidationError,
    ConflictError,
    UnsupportedContentKindError,
    UpstreamError,
)
from shared.utils.validators import (
    validate_image_url,
    sanitize_text,
    is_blank,
)
from shared.utils.localization import (
    DefaultText,
    TranslatedText,
    localize,
)

__all__ = [
    # exceptions
    "NotFoundError",
    "ForbiddenError",
    "ValidationError",
    "ConflictError",
    "UnsupportedContentKindError",
    "UpstreamError",
    # validators
    "validate_image_url",
    "sanitize_text",
    "is_blank",
    # localization
    "DefaultText",
    "TranslatedText",
    "localize",
]
