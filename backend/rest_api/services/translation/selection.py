"""
Selection Model.

Per-unit selected flags plus an ordered set of target languages. Every
operation is a synchronous state transition; nothing here does I/O.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from shared.config.constants import ContentKind, Languages
from shared.utils.exceptions import InvalidCodeError

from .collector import TranslatableUnit


class TranslationSelection:
    """
    Defaults: units of the *_name kinds start unselected, every other
    kind starts selected; languages start as [en].
    """

    def __init__(
        self,
        units: Sequence[TranslatableUnit],
        languages: Iterable[str] | None = None,
    ):
        self._units = list(units)
        self._selected: dict[str, bool] = {
            unit.id: unit.kind not in ContentKind.NAME_KINDS for unit in self._units
        }
        self._languages: list[str] = []
        for code in Languages.DEFAULT_SELECTION if languages is None else languages:
            if code not in self._languages:
                self._check_language(code)
                self._languages.append(code)

    @staticmethod
    def _check_language(code: str) -> None:
        if code not in Languages.TARGETS:
            raise InvalidCodeError("language code", code)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def toggle_unit(self, unit_id: str) -> None:
        if unit_id not in self._selected:
            raise KeyError(unit_id)
        self._selected[unit_id] = not self._selected[unit_id]

    def toggle_kind(self, kind: str) -> None:
        """
        Bulk toggle of a category: selects every unit of the kind unless
        all of them are already selected, in which case all are cleared.
        """
        ids = [unit.id for unit in self._units if unit.kind == kind]
        target = not all(self._selected[unit_id] for unit_id in ids)
        for unit_id in ids:
            self._selected[unit_id] = target

    def toggle_language(self, code: str) -> None:
        """Remove the language if selected, otherwise append it."""
        if code in self._languages:
            self._languages.remove(code)
        else:
            self._check_language(code)
            self._languages.append(code)

    def select_all(self) -> None:
        for unit_id in self._selected:
            self._selected[unit_id] = True

    def deselect_all(self) -> None:
        for unit_id in self._selected:
            self._selected[unit_id] = False

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def is_selected(self, unit_id: str) -> bool:
        return self._selected[unit_id]

    @property
    def languages(self) -> list[str]:
        return list(self._languages)

    @property
    def selected_units(self) -> list[TranslatableUnit]:
        """Selected units in collected order."""
        return [unit for unit in self._units if self._selected[unit.id]]

    @property
    def selected_count(self) -> int:
        return sum(self._selected.values())

    @property
    def total_count(self) -> int:
        return len(self._units)

    @property
    def pair_count(self) -> int:
        return self.selected_count * len(self._languages)
