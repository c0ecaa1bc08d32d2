"""
Batch Dispatcher.

Sends one request to the translation endpoint for every
(selected unit x selected language) pair. The number of requests in
flight is bounded by max_in_flight; the default of 1 issues them
strictly one after another. Failures are counted, never retried, and
never abort the batch.

Usage:
    async with httpx.AsyncClient(base_url=api_url, headers=auth) as client:
        dispatcher = BatchDispatcher(client, max_in_flight=1)
        result = await dispatcher.dispatch(selection, menu_id, on_progress=print)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Callable

import httpx

from shared.config.logging import translation_logger as logger

from .collector import TranslatableUnit
from .selection import TranslationSelection

BATCH_ENDPOINT = "/api/translation/batch"


class EmptySelectionError(ValueError):
    """No units or no languages selected; nothing was sent."""


@dataclass
class DispatchProgress:
    total: int
    completed: int = 0
    failed: int = 0

    @property
    def succeeded(self) -> int:
        return self.completed - self.failed


@dataclass(frozen=True)
class PairFailure:
    unit_id: str
    language_code: str
    reason: str


@dataclass
class BatchResult:
    total: int
    completed: int
    failed: int
    failures: list[PairFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return self.completed - self.failed

    @property
    def success(self) -> bool:
        return self.failed == 0

    @property
    def summary(self) -> str | None:
        """None on full success, otherwise the partial-failure message."""
        if self.success:
            return None
        return f"{self.succeeded} completed, {self.failed} failed"


ProgressCallback = Callable[[DispatchProgress], None]


class BatchDispatcher:
    """Dispatches translation pairs over one shared httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient, max_in_flight: int = 1):
        if max_in_flight < 1:
            raise ValueError("max_in_flight must be at least 1")
        self._client = client
        self._max_in_flight = max_in_flight

    async def dispatch(
        self,
        selection: TranslationSelection,
        menu_id: str,
        on_progress: ProgressCallback | None = None,
    ) -> BatchResult:
        """
        Translate every selected unit into every selected language.

        Raises:
            EmptySelectionError: Before any request when no unit or no
                language is selected.
        """
        units = selection.selected_units
        languages = selection.languages
        if not units:
            raise EmptySelectionError("Select at least one item to translate")
        if not languages:
            raise EmptySelectionError("Select at least one language")

        pairs = [(unit, code) for unit in units for code in languages]
        progress = DispatchProgress(total=len(pairs))
        failures: list[PairFailure] = []
        semaphore = asyncio.Semaphore(self._max_in_flight)

        logger.info(
            "Translation batch started",
            menu_id=menu_id,
            units=len(units),
            languages=languages,
            pairs=len(pairs),
            max_in_flight=self._max_in_flight,
        )

        async def run(unit: TranslatableUnit, code: str) -> None:
            async with semaphore:
                reason = await self._send(unit, code, menu_id)
            progress.completed += 1
            if reason is not None:
                progress.failed += 1
                failures.append(PairFailure(unit.id, code, reason))
            if on_progress is not None:
                on_progress(progress)

        if self._max_in_flight == 1:
            for unit, code in pairs:
                await run(unit, code)
        else:
            await asyncio.gather(*(run(unit, code) for unit, code in pairs))

        result = BatchResult(
            total=progress.total,
            completed=progress.completed,
            failed=progress.failed,
            failures=failures,
        )
        logger.info(
            "Translation batch finished",
            menu_id=menu_id,
            completed=result.completed,
            failed=result.failed,
        )
        return result

    async def _send(self, unit: TranslatableUnit, language_code: str, menu_id: str) -> str | None:
        """Returns None on a 2xx answer, otherwise the failure reason."""
        try:
            response = await self._client.post(
                BATCH_ENDPOINT,
                json={
                    "text": unit.content,
                    "languageCode": language_code,
                    "type": unit.kind,
                    "entityId": unit.entity_id,
                    "menuId": menu_id,
                },
            )
        except httpx.HTTPError as e:
            logger.warning("Translation request failed", unit_id=unit.id, language_code=language_code, error=str(e))
            return str(e) or e.__class__.__name__

        if response.is_success:
            return None

        logger.warning(
            "Translation request rejected",
            unit_id=unit.id,
            language_code=language_code,
            status_code=response.status_code,
        )
        return f"HTTP {response.status_code}"
