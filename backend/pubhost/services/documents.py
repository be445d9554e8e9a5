"""Document operations: listing, upload, delete, move and view resolution.

The store has no rename. A move is fetch -> put -> delete, strictly in that
order; if the final delete fails both copies stay in the store and the
caller gets ``PartialMoveCompleted``. Duplication is preferred over loss.

There is no locking: concurrent writes to the same pathname are last-write-wins.
"""

from __future__ import annotations

import logging

from pubhost.core.auth import AuthorizationGate
from pubhost.core.catalog import Catalog, FileRecord, build_catalog
from pubhost.core.errors import (
    DeleteFailed,
    InvalidFileType,
    InvalidName,
    MoveFailed,
    NotFound,
    PartialMoveCompleted,
    PortalError,
    SourceFetchFailed,
    StoreError,
    StoreUnavailable,
    UploadFailed,
)
from pubhost.core.pathnames import (
    compose,
    decompose,
    is_html_name,
    view_candidates,
)
from pubhost.storage.base import HTML_CONTENT_TYPE, ObjectStore, PutResult

logger = logging.getLogger(__name__)


def normalize_category(category: str | None) -> str | None:
    """Trim whitespace and surrounding slashes; empty means uncategorized."""
    if category is None:
        return None
    category = category.strip().strip("/").strip()
    return category or None


class DocumentService:
    """Every read and write path of the portal.

    Mutations take the caller's session token and check it with the gate
    before any store call is made.
    """

    def __init__(self, store: ObjectStore, gate: AuthorizationGate):
        self._store = store
        self._gate = gate

    @property
    def gate(self) -> AuthorizationGate:
        return self._gate

    async def list_catalog(self) -> Catalog:
        return build_catalog(await self._store.list_all())

    async def upload(
        self,
        token: str | None,
        filename: str,
        content: bytes,
        category: str | None = None,
    ) -> PutResult:
        self._gate.require(token)

        name = (filename or "").strip()
        if not name:
            raise InvalidName("No file provided")
        if not is_html_name(name):
            raise InvalidFileType()

        pathname = compose(normalize_category(category), name)
        try:
            result = await self._store.put(pathname, content, HTML_CONTENT_TYPE)
        except StoreUnavailable:
            raise
        except StoreError as exc:
            logger.error("Upload of %s failed: %s", pathname, exc)
            raise UploadFailed(f"Upload failed: {exc.message}")

        logger.info("Uploaded %s (%d bytes)", result.pathname, len(content))
        return result

    async def delete(self, token: str | None, locator: str) -> None:
        self._gate.require(token)

        try:
            await self._store.delete(locator)
        except NotFound:
            logger.debug("Delete of missing blob %s treated as success", locator)
            return
        except StoreUnavailable:
            raise
        except StoreError as exc:
            logger.error("Delete of %s failed: %s", locator, exc)
            raise DeleteFailed(f"Failed to delete file: {exc.message}")

        logger.info("Deleted %s", locator)

    async def move(self, token: str | None, locator: str, new_pathname: str) -> PutResult:
        """Rename or recategorize the blob at ``locator``.

        Raises:
            Unauthorized: before any store call.
            InvalidName: target name is empty.
            SourceFetchFailed: source could not be read; nothing changed.
            StoreUnavailable: the store timed out during the fetch or write step.
            MoveFailed: target could not be written; source untouched.
            PartialMoveCompleted: target written, source delete failed.
        """
        self._gate.require(token)
        target = self._target_pathname(new_pathname)

        source = await self._find_source(locator)
        if source is not None and source.pathname == target:
            logger.debug("Move of %s onto itself, nothing to do", target)
            return PutResult(pathname=source.pathname, url=source.url)

        source_label = source.pathname if source else locator

        # Step 1: fetch
        try:
            content = await self._store.get(locator)
        except StoreUnavailable:
            logger.error("Move %s -> %s: store unavailable during fetch", source_label, target)
            raise
        except PortalError as exc:
            logger.error("Move %s -> %s: fetch failed: %s", source_label, target, exc)
            raise SourceFetchFailed(f"Could not read source {source_label}: {exc.message}")

        # Step 2: write the new copy
        try:
            result = await self._store.put(target, content, HTML_CONTENT_TYPE)
        except StoreUnavailable:
            logger.error("Move %s -> %s: store unavailable during write", source_label, target)
            raise
        except PortalError as exc:
            logger.error("Move %s -> %s: write failed: %s", source_label, target, exc)
            raise MoveFailed(f"Could not write {target}: {exc.message}")

        # Step 3: drop the old copy
        try:
            await self._store.delete(locator)
        except NotFound:
            pass
        except PortalError as exc:
            logger.error(
                "Move %s -> %s: delete of source failed, both copies exist: %s",
                source_label, target, exc,
            )
            raise PartialMoveCompleted(
                f"Moved to {result.pathname} but {source_label} could not be removed: "
                f"{exc.message}",
                pathname=result.pathname,
                url=result.url,
                source_url=locator,
            )

        logger.info("Moved %s -> %s", source_label, result.pathname)
        return result

    async def resolve_view(self, path: str) -> tuple[FileRecord, bytes]:
        """Find the stored document behind a public view path.

        Only exact pathname matches count; no case folding.
        """
        if not path.strip("/"):
            raise NotFound()

        catalog = await self.list_catalog()
        for candidate in view_candidates(path):
            record = catalog.find_by_pathname(candidate)
            if record is not None:
                return record, await self._store.get(record.url)
        raise NotFound(f"No document at /view/{path.strip('/')}")

    @staticmethod
    def _target_pathname(new_pathname: str) -> str:
        category, name = decompose((new_pathname or "").strip().lstrip("/"))
        name = name.strip()
        if not name:
            raise InvalidName("New name must not be empty")
        if not is_html_name(name):
            name += ".html"
        return compose(normalize_category(category), name)

    async def _find_source(self, locator: str) -> FileRecord | None:
        try:
            catalog = await self.list_catalog()
        except StoreUnavailable:
            raise
        except StoreError as exc:
            raise MoveFailed(f"Could not list files: {exc.message}")
        return catalog.find_by_url(locator)
