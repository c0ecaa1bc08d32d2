"""
Client for a running Menu Studio API, used by the CLI to feed the
collector and dispatcher over HTTP.
"""

from __future__ import annotations

import httpx

from shared.utils.dashboard_schemas import (
    ItemDetailOutput,
    ItemOutput,
    MenuDetailOutput,
)
from shared.utils.schemas import LoginResponse


class MenuApiError(Exception):
    """The API answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def _checked(response: httpx.Response) -> httpx.Response:
    if response.is_error:
        try:
            detail = response.json().get("detail", response.text)
        except ValueError:
            detail = response.text
        raise MenuApiError(f"{response.request.method} {response.request.url.path}: {detail}", response.status_code)
    return response


class MenuApiClient:
    """Thin typed wrapper over the dashboard endpoints."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def login(self, email: str, password: str) -> str:
        """Log in and attach the bearer token to every following request."""
        response = _checked(
            await self._client.post("/api/auth/login", json={"email": email, "password": password})
        )
        token = LoginResponse.model_validate(response.json()).access_token
        self._client.headers["Authorization"] = f"Bearer {token}"
        return token

    async def get_menu(self, menu_id: str) -> MenuDetailOutput:
        response = _checked(await self._client.get(f"/api/menus/{menu_id}"))
        return MenuDetailOutput.model_validate(response.json())

    async def items_by_section(self, menu_id: str) -> dict[str, list[ItemOutput]]:
        response = _checked(await self._client.get(f"/api/menus/{menu_id}/items"))
        grouped = response.json()["items_by_section"]
        return {
            section_id: [ItemOutput.model_validate(item) for item in items]
            for section_id, items in grouped.items()
        }

    async def load_item(self, item_id: str) -> ItemDetailOutput:
        response = _checked(await self._client.get(f"/api/items/{item_id}"))
        return ItemDetailOutput.model_validate(response.json())
