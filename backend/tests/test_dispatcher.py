"""
Tests for the batch dispatcher against a mocked translation endpoint.
"""

import asyncio
import json

import httpx
import pytest

from rest_api.services.translation.collector import TranslatableUnit
from rest_api.services.translation.dispatcher import BatchDispatcher, EmptySelectionError
from rest_api.services.translation.selection import TranslationSelection


def _units(count):
    return [
        TranslatableUnit(f"item-desc-{n}", "item_description", f"Testo {n}", f"i{n}", f"Piatto {n}")
        for n in range(count)
    ]


class RecordingEndpoint:
    def __init__(self, fail_on=()):
        self.bodies = []
        self.fail_on = set(fail_on)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.bodies.append(body)
        if (body["entityId"], body["languageCode"]) in self.fail_on:
            return httpx.Response(502, json={"detail": "upstream"})
        return httpx.Response(200, json={"translatedText": "x", "saved": True})


def _client(handler):
    return httpx.AsyncClient(base_url="https://api.test", transport=httpx.MockTransport(handler))


class TestBatchDispatcher:
    async def test_one_request_per_pair_in_order(self):
        endpoint = RecordingEndpoint()
        selection = TranslationSelection(_units(2), ["en", "fr"])

        async with _client(endpoint) as client:
            result = await BatchDispatcher(client).dispatch(selection, "menu-1")

        assert result.success
        assert result.summary is None
        assert result.completed == result.total == 4
        assert [(b["entityId"], b["languageCode"]) for b in endpoint.bodies] == [
            ("i0", "en"), ("i0", "fr"), ("i1", "en"), ("i1", "fr"),
        ]
        assert endpoint.bodies[0] == {
            "text": "Testo 0",
            "languageCode": "en",
            "type": "item_description",
            "entityId": "i0",
            "menuId": "menu-1",
        }

    async def test_partial_failure_does_not_abort(self):
        endpoint = RecordingEndpoint(fail_on={("i1", "de")})
        selection = TranslationSelection(_units(3), ["en", "de"])
        progress = []

        async with _client(endpoint) as client:
            result = await BatchDispatcher(client).dispatch(
                selection, "menu-1", on_progress=lambda p: progress.append((p.completed, p.failed))
            )

        assert len(endpoint.bodies) == 6
        assert result.completed == 6
        assert result.failed == 1
        assert result.succeeded == 5
        assert not result.success
        assert result.summary == "5 completed, 1 failed"
        assert [(f.unit_id, f.language_code, f.reason) for f in result.failures] == [
            ("item-desc-1", "de", "HTTP 502")
        ]
        assert progress == [(1, 0), (2, 0), (3, 0), (4, 1), (5, 1), (6, 1)]

    async def test_transport_error_counts_as_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        selection = TranslationSelection(_units(1))
        async with _client(handler) as client:
            result = await BatchDispatcher(client).dispatch(selection, "menu-1")

        assert result.failed == 1
        assert result.failures[0].reason == "connection refused"

    async def test_no_units_selected(self):
        endpoint = RecordingEndpoint()
        selection = TranslationSelection(_units(2))
        selection.deselect_all()

        async with _client(endpoint) as client:
            with pytest.raises(EmptySelectionError):
                await BatchDispatcher(client).dispatch(selection, "menu-1")
        assert endpoint.bodies == []

    async def test_no_languages_selected(self):
        endpoint = RecordingEndpoint()
        selection = TranslationSelection(_units(2), [])

        async with _client(endpoint) as client:
            with pytest.raises(EmptySelectionError):
                await BatchDispatcher(client).dispatch(selection, "menu-1")
        assert endpoint.bodies == []

    async def test_in_flight_bound(self):
        in_flight = 0
        peak = 0

        async def handler(request):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return httpx.Response(200, json={"translatedText": "x", "saved": True})

        selection = TranslationSelection(_units(4), ["en", "fr"])
        async with _client(handler) as client:
            result = await BatchDispatcher(client, max_in_flight=3).dispatch(selection, "menu-1")

        assert result.completed == 8
        assert result.success
        assert 1 < peak <= 3

    def test_max_in_flight_must_be_positive(self):
        with pytest.raises(ValueError):
            BatchDispatcher(_client(RecordingEndpoint()), max_in_flight=0)
