"""
Menu translation workflow.

    collector  -> flatten a menu into translatable units
    selection  -> per-unit and per-language choices
    dispatcher -> one request per (unit, language) pair, bounded in flight
    service    -> translate one text and upsert it by content kind
"""

from .collector import KindGroup, TranslatableUnit, collect_units, group_by_kind
from .dispatcher import (
    BatchDispatcher,
    BatchResult,
    DispatchProgress,
    EmptySelectionError,
    PairFailure,
)
from .remote import MenuApiClient, MenuApiError
from .selection import TranslationSelection
from .service import KIND_STORAGE, TranslationService, resolve_storage

__all__ = [
    "KindGroup",
    "TranslatableUnit",
    "collect_units",
    "group_by_kind",
    "BatchDispatcher",
    "BatchResult",
    "DispatchProgress",
    "EmptySelectionError",
    "PairFailure",
    "MenuApiClient",
    "MenuApiError",
    "TranslationSelection",
    "KIND_STORAGE",
    "TranslationService",
    "resolve_storage",
]
