"""
Configuration module: Settings, logging, constants.
"""

from shared.config.settings import settings, DATABASE_URL
from shared.config.logging import get_logger, setup_logging
from shared.config.constants import (
    Languages,
    ContentKind,
    ItemType,
    Limits,
    ALLERGEN_CODES,
    DIETARY_TAG_CODES,
    RESTAURANT_TYPES,
)

__all__ = [
    # settings
    "settings",
    "DATABASE_URL",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "Languages",
    "ContentKind",
    "ItemType",
    "Limits",
    "ALLERGEN_CODES",
    "DIETARY_TAG_CODES",
    "RESTAURANT_TYPES",
]
