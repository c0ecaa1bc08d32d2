"""
HTTP client for the OpenAI API.

Covers the three calls the product makes: chat completions (translation,
auto-complete), image generation and image variations. One pooled
httpx.AsyncClient is shared by the whole process and closed on shutdown.
"""

import asyncio
import base64
import threading
from typing import Any, Optional

import httpx

from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)

_init_lock = threading.Lock()


class LLMError(Exception):
    """The provider failed or answered with something unusable."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LLMNotConfiguredError(LLMError):
    """No API key is configured."""


class OpenAIClient:
    """
    Async client for the OpenAI REST API.

    The HTTP client is created lazily under an asyncio.Lock so it binds
    to the running event loop.
    """

    def __init__(
        self,
        base_url: str = settings.openai_base_url,
        api_key: str = settings.openai_api_key,
        timeout: float = settings.llm_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._client_lock: Optional[asyncio.Lock] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get_lock(self) -> asyncio.Lock:
        if self._client_lock is None:
            with _init_lock:
                if self._client_lock is None:
                    self._client_lock = asyncio.Lock()
        return self._client_lock

    async def _get_client(self) -> httpx.AsyncClient:
        # Fast path: client already initialized
        if self._client is not None and not self._client.is_closed:
            return self._client

        async with self._get_lock():
            if self._client is None or self._client.is_closed:
                self._client = httpx.AsyncClient(
                    base_url=self.base_url,
                    timeout=self.timeout,
                    transport=self._transport,
                    limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
                )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client. Called in application lifespan shutdown."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        if not self.is_configured:
            raise LLMNotConfiguredError("OPENAI_API_KEY is not set")
        return {"Authorization": f"Bearer {self.api_key}"}

    async def _post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        headers = self._headers()
        client = await self._get_client()
        try:
            response = await client.post(path, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "OpenAI request rejected",
                path=path,
                status_code=e.response.status_code,
                body=e.response.text[:500],
            )
            raise LLMError(f"OpenAI returned {e.response.status_code}", e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error("OpenAI request failed", path=path, error=str(e))
            raise LLMError(f"OpenAI request failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise LLMError("OpenAI returned a non-JSON body") from e

    async def chat(
        self,
        messages: list[dict[str, str]],
        *,
        model: str = settings.translation_model,
        temperature: float = settings.translation_temperature,
        json_mode: bool = False,
    ) -> str:
        """
        Run a chat completion and return the first choice's text
        (possibly empty; callers decide what empty means).
        """
        payload: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        data = await self._post("/chat/completions", json=payload)
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMError("Malformed chat completion response") from e
        return (content or "").strip()

    async def generate_image(
        self,
        prompt: str,
        *,
        size: str,
        quality: str,
        background: str,
        model: str = settings.image_model,
    ) -> bytes:
        """Text-to-image. Returns PNG bytes."""
        data = await self._post(
            "/images/generations",
            json={
                "model": model,
                "prompt": prompt,
                "n": 1,
                "size": size,
                "quality": quality,
                "background": background,
            },
            timeout=settings.image_timeout_seconds,
        )
        return await self._image_bytes(data)

    async def create_variation(
        self,
        image: bytes,
        *,
        size: str = "1024x1024",
        model: str = settings.image_model,
        user: str | None = None,
    ) -> bytes:
        """Variation of a reference image. Returns PNG bytes."""
        form = {"model": model, "n": "1", "size": size, "response_format": "b64_json"}
        if user:
            form["user"] = user
        data = await self._post(
            "/images/variations",
            files={"image": ("reference.png", image, "image/png")},
            data=form,
            timeout=settings.image_timeout_seconds,
        )
        return await self._image_bytes(data)

    async def _image_bytes(self, data: dict[str, Any]) -> bytes:
        try:
            entry = data["data"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMError("Malformed image response") from e

        if entry.get("b64_json"):
            return base64.b64decode(entry["b64_json"])
        if entry.get("url"):
            return await self.download(entry["url"])
        raise LLMError("Image response contained no image")

    async def download(self, url: str) -> bytes:
        """Fetch raw bytes from a URL (reference images, hosted results)."""
        client = await self._get_client()
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise LLMError(f"Could not download image: {e}") from e
        return response.content

    async def is_available(self) -> bool:
        """Check that the API answers with the configured key."""
        if not self.is_configured:
            return False
        try:
            client = await self._get_client()
            response = await client.get("/models", headers=self._headers())
            return response.status_code == 200
        except httpx.HTTPError:
            return False


# Global client instance
llm_client = OpenAIClient()


def get_llm_client() -> OpenAIClient:
    """FastAPI dependency; overridden in tests."""
    return llm_client


async def close_llm_client() -> None:
    """Close the global client. Called in application lifespan shutdown."""
    await llm_client.close()
