"""In-memory object store, used in dev mode and tests."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from pubhost.core.errors import NotFound
from pubhost.storage.base import ObjectStore, PutResult, StoredBlob

logger = logging.getLogger(__name__)

LOCATOR_SCHEME = "memory://"


@dataclass
class _Entry:
    content: bytes
    content_type: str
    uploaded_at: datetime


class InMemoryObjectStore(ObjectStore):
    """Dict-backed store. Locators are ``memory://<pathname>``."""

    def __init__(self):
        self._blobs: dict[str, _Entry] = {}

    @staticmethod
    def locator_for(pathname: str) -> str:
        return LOCATOR_SCHEME + pathname

    @staticmethod
    def _pathname_for(locator: str) -> str | None:
        if not locator.startswith(LOCATOR_SCHEME):
            return None
        return locator[len(LOCATOR_SCHEME):]

    async def list_all(self) -> list[StoredBlob]:
        return [
            StoredBlob(
                pathname=pathname,
                url=self.locator_for(pathname),
                size=len(entry.content),
                uploaded_at=entry.uploaded_at,
            )
            for pathname, entry in self._blobs.items()
        ]

    async def get(self, locator: str) -> bytes:
        pathname = self._pathname_for(locator)
        if pathname is None or pathname not in self._blobs:
            raise NotFound(f"No blob at {locator}")
        return self._blobs[pathname].content

    async def put(self, pathname: str, content: bytes, content_type: str) -> PutResult:
        self._blobs[pathname] = _Entry(
            content=content,
            content_type=content_type,
            uploaded_at=datetime.now(timezone.utc),
        )
        logger.debug("[memory] put %s (%d bytes)", pathname, len(content))
        return PutResult(pathname=pathname, url=self.locator_for(pathname))

    async def delete(self, locator: str) -> None:
        pathname = self._pathname_for(locator)
        if pathname is not None:
            self._blobs.pop(pathname, None)

    def content_type_of(self, pathname: str) -> str | None:
        entry = self._blobs.get(pathname)
        return entry.content_type if entry else None
