"""
Localized text resolution.

A text field read in some language is either the Italian base column
(DefaultText) or a stored translation row (TranslatedText). Callers match
on the result type instead of comparing language codes against "it".

Usage:
    from shared.utils.localization import localize

    text = localize(item.name, item.translations, "name", "de")
    if isinstance(text, TranslatedText):
        ...
"""

from dataclasses import dataclass
from typing import Any, Iterable, Union

from shared.config.constants import Languages


@dataclass(frozen=True)
class DefaultText:
    """The owner-entered Italian value."""

    value: str | None
    language: str = Languages.SOURCE

    @property
    def is_translated(self) -> bool:
        return False


@dataclass(frozen=True)
class TranslatedText:
    """A value read from a translation row."""

    value: str
    language: str

    @property
    def is_translated(self) -> bool:
        return True


LocalizedText = Union[DefaultText, TranslatedText]


def _row_value(row: Any, field: str) -> str | None:
    # Rows keyed by field_name store the text in field_value; the
    # single-field families (ingredient, allergen, tag) store it in a
    # column named after the field.
    if hasattr(row, "field_name"):
        if row.field_name != field:
            return None
        return row.field_value
    return getattr(row, field, None)


def localize(
    base_value: str | None,
    translations: Iterable[Any],
    field: str,
    language: str,
) -> LocalizedText:
    """
    Resolve one text field in the requested language.

    Args:
        base_value: The Italian value stored on the entity.
        translations: Translation rows of the entity (any family).
        field: Field name ("name", "description", "display_name", ...).
        language: Requested language code.

    Returns:
        TranslatedText when a non-blank row exists for (language, field),
        DefaultText otherwise.
    """
    if language != Languages.SOURCE:
        for row in translations:
            if row.language_code != language:
                continue
            value = _row_value(row, field)
            if value and value.strip():
                return TranslatedText(value=value, language=language)
    return DefaultText(value=base_value)


def languages_with_field(translations: Iterable[Any], field: str) -> list[str]:
    """Target languages, in display order, that have a value stored for field."""
    present = {
        row.language_code
        for row in translations
        if (_row_value(row, field) or "").strip()
    }
    return [code for code in Languages.TARGETS if code in present]
