"""
HTTP client for the managed object store (Supabase Storage REST API).

Objects are addressed as {bucket}/{path}. Uploads never overwrite an
existing object; public URLs are derived, not fetched.
"""

import asyncio
import threading
from typing import Optional
from urllib.parse import quote

import httpx

from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)

_init_lock = threading.Lock()


class StorageClientError(Exception):
    """Upload, removal or transport failure."""


class StorageClient:
    """Async client over one pooled httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str = settings.storage_url,
        service_key: str = settings.storage_service_key,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.service_key = service_key
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._client_lock: Optional[asyncio.Lock] = None

    def _get_lock(self) -> asyncio.Lock:
        if self._client_lock is None:
            with _init_lock:
                if self._client_lock is None:
                    self._client_lock = asyncio.Lock()
        return self._client_lock

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None and not self._client.is_closed:
            return self._client

        async with self._get_lock():
            if self._client is None or self._client.is_closed:
                self._client = httpx.AsyncClient(
                    base_url=f"{self.base_url}/storage/v1",
                    timeout=self.timeout,
                    transport=self._transport,
                    headers={
                        "Authorization": f"Bearer {self.service_key}",
                        "apikey": self.service_key,
                    },
                )
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{quote(path)}"

    def path_from_public_url(self, bucket: str, url: str | None) -> str | None:
        """Object path of a public URL in this store, None for foreign URLs."""
        if not url:
            return None
        prefix = f"{self.base_url}/storage/v1/object/public/{bucket}/"
        if not url.startswith(prefix):
            return None
        return url[len(prefix):] or None

    async def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        """
        Store bytes at {bucket}/{path} and return the public URL.

        Raises:
            StorageClientError: On any non-2xx answer or transport error.
        """
        client = await self._get_client()
        try:
            response = await client.post(
                f"/object/{bucket}/{quote(path)}",
                content=data,
                headers={"Content-Type": content_type, "x-upsert": "false"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Storage upload rejected",
                bucket=bucket,
                path=path,
                status_code=e.response.status_code,
            )
            raise StorageClientError(f"Upload rejected with {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("Storage upload failed", bucket=bucket, path=path, error=str(e))
            raise StorageClientError(f"Upload failed: {e}") from e

        logger.info("Object stored", bucket=bucket, path=path, size=len(data))
        return self.public_url(bucket, path)

    async def remove(self, bucket: str, paths: list[str]) -> None:
        """Delete objects; missing objects are not an error."""
        if not paths:
            return
        client = await self._get_client()
        try:
            response = await client.request(
                "DELETE", f"/object/{bucket}", json={"prefixes": paths}
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Storage removal failed", bucket=bucket, paths=paths, error=str(e))
            raise StorageClientError(f"Removal failed: {e}") from e


# Global client instance
storage_client = StorageClient()


def get_storage_client() -> StorageClient:
    """FastAPI dependency; overridden in tests."""
    return storage_client


async def close_storage_client() -> None:
    await storage_client.close()
