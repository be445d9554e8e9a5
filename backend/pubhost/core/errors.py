"""Error kinds surfaced to callers as ``{"error": kind, "detail": message}``."""

from __future__ import annotations

from typing import Any


class PortalError(Exception):
    """Base class for every structured error the portal reports."""

    kind = "PortalError"
    status_code = 500

    def __init__(self, message: str | None = None):
        self.message = message or self.kind
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.kind, "detail": self.message}


class Unauthorized(PortalError):
    kind = "Unauthorized"
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class InvalidFileType(PortalError):
    kind = "InvalidFileType"
    status_code = 400

    def __init__(self, message: str = "Only HTML files are allowed"):
        super().__init__(message)


class InvalidName(PortalError):
    kind = "InvalidName"
    status_code = 400


class NotFound(PortalError):
    kind = "NotFound"
    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class TargetExists(PortalError):
    """Reserved for an existence check before overwriting a target pathname."""

    kind = "TargetExists"
    status_code = 409


# --- Store failures ---


class StoreError(PortalError):
    """Hard failure reported by the object store."""

    kind = "StoreError"
    status_code = 502


class StoreUnavailable(StoreError):
    """Timeout or transport failure while talking to the store."""

    kind = "StoreUnavailable"
    status_code = 503


class UploadFailed(PortalError):
    kind = "UploadFailed"
    status_code = 502


class DeleteFailed(PortalError):
    kind = "DeleteFailed"
    status_code = 502


# --- Move failures ---


class SourceFetchFailed(PortalError):
    """The move source could not be read; nothing was written or deleted."""

    kind = "SourceFetchFailed"
    status_code = 404


class MoveFailed(PortalError):
    """Writing the move target failed; the source is untouched."""

    kind = "MoveFailed"
    status_code = 502


class PartialMoveCompleted(PortalError):
    """Target was written but the source could not be deleted.

    Both copies exist in the store. The caller may retry the delete of
    ``source_url``; delete is idempotent.
    """

    kind = "PartialMoveCompleted"
    status_code = 207

    def __init__(self, message: str, *, pathname: str, url: str, source_url: str):
        super().__init__(message)
        self.pathname = pathname
        self.url = url
        self.source_url = source_url

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(pathname=self.pathname, url=self.url, sourceUrl=self.source_url)
        return data
