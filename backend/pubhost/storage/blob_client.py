"""HTTP client for a Vercel-Blob-compatible object store."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from urllib.parse import quote

import httpx

from pubhost.core.errors import NotFound, StoreError, StoreUnavailable
from pubhost.storage.base import ObjectStore, PutResult, StoredBlob

logger = logging.getLogger(__name__)

API_VERSION = "7"
LIST_PAGE_LIMIT = 1000


def _parse_timestamp(value: str | None) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class BlobStoreClient(ObjectStore):
    """Blob REST API client with bearer-token auth.

    Timeouts and transport errors become ``StoreUnavailable``; any other
    non-success response becomes ``StoreError``.
    """

    def __init__(
        self,
        api_url: str,
        token: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_url = api_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    def _headers(self, **extra: str) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._token}",
            "x-api-version": API_VERSION,
        }
        headers.update(extra)
        return headers

    async def _send(self, action: str, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            async with self._client() as client:
                return await client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            logger.error("Blob store timeout during %s: %s", action, exc)
            raise StoreUnavailable(f"Blob store timed out during {action}")
        except httpx.TransportError as exc:
            logger.error("Blob store unreachable during %s: %s", action, exc)
            raise StoreUnavailable(f"Blob store unreachable during {action}")

    @staticmethod
    def _check(resp: httpx.Response, action: str) -> None:
        if resp.is_success:
            return
        detail = resp.text[:200]
        try:
            detail = resp.json().get("error", {}).get("message", detail)
        except (ValueError, AttributeError):
            pass
        raise StoreError(f"Blob store {action} failed ({resp.status_code}): {detail}")

    async def list_all(self) -> list[StoredBlob]:
        blobs: list[StoredBlob] = []
        cursor: str | None = None
        while True:
            params: dict[str, str | int] = {"limit": LIST_PAGE_LIMIT}
            if cursor:
                params["cursor"] = cursor
            resp = await self._send(
                "list", "GET", f"{self._api_url}/", params=params, headers=self._headers()
            )
            self._check(resp, "list")
            data = resp.json()
            for item in data.get("blobs", []):
                blobs.append(
                    StoredBlob(
                        pathname=item["pathname"],
                        url=item["url"],
                        size=int(item.get("size", 0)),
                        uploaded_at=_parse_timestamp(item.get("uploadedAt")),
                    )
                )
            cursor = data.get("cursor")
            if not data.get("hasMore") or not cursor:
                return blobs

    async def get(self, locator: str) -> bytes:
        resp = await self._send("get", "GET", locator)
        if resp.status_code == 404:
            raise NotFound(f"No blob at {locator}")
        self._check(resp, "get")
        return resp.content

    async def put(self, pathname: str, content: bytes, content_type: str) -> PutResult:
        resp = await self._send(
            "put",
            "PUT",
            f"{self._api_url}/{quote(pathname)}",
            content=content,
            headers=self._headers(**{
                "x-content-type": content_type,
                "x-add-random-suffix": "0",
                "x-allow-overwrite": "1",
            }),
        )
        self._check(resp, "put")
        data = resp.json()
        return PutResult(pathname=data.get("pathname", pathname), url=data["url"])

    async def delete(self, locator: str) -> None:
        resp = await self._send(
            "delete",
            "POST",
            f"{self._api_url}/delete",
            json={"urls": [locator]},
            headers=self._headers(),
        )
        if resp.status_code == 404:
            logger.debug("Delete of missing blob %s treated as success", locator)
            return
        self._check(resp, "delete")
