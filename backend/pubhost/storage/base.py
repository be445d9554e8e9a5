"""Object store contract — a flat key -> blob service.

No rename, no transactions, no directories. Pathnames are keys; locators
(URLs) identify a stored blob for get and delete.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from datetime import datetime

HTML_CONTENT_TYPE = "text/html"


@dataclass(frozen=True)
class StoredBlob:
    """One entry of a store listing."""
    pathname: str
    url: str
    size: int
    uploaded_at: datetime


@dataclass(frozen=True)
class PutResult:
    pathname: str
    url: str

    def to_dict(self) -> dict:
        return {"pathname": self.pathname, "url": self.url}


class ObjectStore(abc.ABC):
    """Async interface every store backend implements."""

    @abc.abstractmethod
    async def list_all(self) -> list[StoredBlob]:
        """Every blob currently stored, in no particular order."""

    @abc.abstractmethod
    async def get(self, locator: str) -> bytes:
        """Content at ``locator``. Raises ``NotFound`` if absent."""

    @abc.abstractmethod
    async def put(self, pathname: str, content: bytes, content_type: str) -> PutResult:
        """Write ``content`` under exactly ``pathname``, overwriting any existing blob."""

    @abc.abstractmethod
    async def delete(self, locator: str) -> None:
        """Remove the blob at ``locator``. Missing locators are not an error."""
