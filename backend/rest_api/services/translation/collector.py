"""
Content Collector.

Flattens a menu graph (menu -> sections -> items -> ingredients and
allergens) into translatable units in traversal order. Inputs are read
by attribute, so ORM rows and API response models both work.

Usage:
    units = await collect_units(menu, sections, items_by_section, load_item)
    groups = group_by_kind(units)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Sequence

from shared.config.constants import ALLERGEN_LABELS_IT, CONTENT_KIND_LABELS, ContentKind
from shared.config.logging import translation_logger as logger

ItemLoader = Callable[[str], Awaitable[Any]]


@dataclass(frozen=True)
class TranslatableUnit:
    """One piece of Italian text plus what is needed to translate and store it."""

    id: str
    kind: str
    content: str
    entity_id: str
    label: str
    breadcrumb: str | None = None


@dataclass(frozen=True)
class KindGroup:
    """Units of one content kind, for category-level display and toggles."""

    kind: str
    label: str
    units: list[TranslatableUnit]


def _text(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


async def collect_units(
    menu: Any,
    sections: Sequence[Any],
    items_by_section: Mapping[str, Sequence[Any]],
    load_item: ItemLoader,
) -> list[TranslatableUnit]:
    """
    Produce the translatable units of a menu.

    Args:
        menu: Object with id, name, description.
        sections: Sections in display order (id, name, description).
        items_by_section: Section id -> items in display order (id, name, description).
        load_item: Async loader returning an item with ingredients and
            allergens. Called once per item, sequentially.

    Returns:
        Units in menu -> section -> item order; within an item: name,
        description, ingredients, allergens. Blank texts emit nothing.
    """
    units: list[TranslatableUnit] = []

    def emit(prefix: str, kind: str, content: str | None, entity_id: str, label: str, breadcrumb: str | None) -> None:
        text = _text(content)
        if text is not None:
            units.append(TranslatableUnit(f"{prefix}-{entity_id}", kind, text, entity_id, label, breadcrumb))

    emit("menu-name", ContentKind.MENU_NAME, menu.name, menu.id, "Menu name", None)
    emit("menu-desc", ContentKind.MENU_DESCRIPTION, menu.description, menu.id, "Menu description", None)

    for section in sections:
        emit("section-name", ContentKind.SECTION_NAME, section.name, section.id, section.name, section.name)
        emit("section-desc", ContentKind.SECTION_DESCRIPTION, section.description, section.id, section.name, section.name)

        for item in items_by_section.get(section.id, []):
            breadcrumb = f"{section.name} → {item.name}"
            emit("item-name", ContentKind.ITEM_NAME, item.name, item.id, item.name, breadcrumb)
            emit("item-desc", ContentKind.ITEM_DESCRIPTION, item.description, item.id, item.name, breadcrumb)

            try:
                full_item = await load_item(item.id)
            except Exception as e:
                # Only this item's relation units are lost
                logger.warning("Could not load item relations", item_id=item.id, error=str(e))
                continue
            if full_item is None:
                logger.warning("Item relations not found", item_id=item.id)
                continue

            for ingredient in full_item.ingredients or []:
                emit("ingredient", ContentKind.INGREDIENT, ingredient.name, ingredient.id, ingredient.name, breadcrumb)
            for allergen in full_item.allergens or []:
                label = ALLERGEN_LABELS_IT.get(allergen.allergen_code, allergen.allergen_code)
                emit("allergen", ContentKind.ALLERGEN, label, allergen.id, label, breadcrumb)

    logger.info("Translatable units collected", menu_id=menu.id, units=len(units))
    return units


def group_by_kind(units: Sequence[TranslatableUnit]) -> list[KindGroup]:
    """Groups in first-seen order of their kind."""
    groups: dict[str, list[TranslatableUnit]] = {}
    for unit in units:
        groups.setdefault(unit.kind, []).append(unit)
    return [KindGroup(kind, CONTENT_KIND_LABELS[kind], members) for kind, members in groups.items()]
