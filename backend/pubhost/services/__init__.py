"""Business logic services — singleton registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pubhost.config import settings

if TYPE_CHECKING:
    from pubhost.core.auth import AuthorizationGate
    from pubhost.services.documents import DocumentService
    from pubhost.storage.base import ObjectStore

logger = logging.getLogger(__name__)

_gate: AuthorizationGate | None = None
_document_service: DocumentService | None = None


def _build_store() -> ObjectStore:
    from pubhost.storage.blob_client import BlobStoreClient
    from pubhost.storage.memory import InMemoryObjectStore

    if settings.is_dev_mode:
        logger.info("[DEV] Using in-memory object store")
        return InMemoryObjectStore()

    if not settings.blob_token:
        logger.warning("Blob token not configured (PUBHOST_BLOB_TOKEN); store calls will fail")
    return BlobStoreClient(
        api_url=settings.blob_api_url,
        token=settings.blob_token,
        timeout=settings.store_timeout_seconds,
    )


async def init_services(
    store: ObjectStore | None = None,
    gate: AuthorizationGate | None = None,
) -> None:
    """Create and wire up the gate, the store and the document service."""
    global _gate, _document_service

    from pubhost.core.auth import AuthorizationGate
    from pubhost.services.documents import DocumentService

    _gate = gate or AuthorizationGate(
        secret=settings.secret_key,
        expire_minutes=settings.session_expire_minutes,
        algorithm=settings.token_algorithm,
    )
    _document_service = DocumentService(store or _build_store(), _gate)

    if not settings.admin_password:
        logger.warning("Admin password not configured (PUBHOST_ADMIN_PASSWORD); login disabled")
    logger.info("Services initialized (%s mode)", settings.mode)


async def shutdown_services() -> None:
    global _gate, _document_service
    _gate = None
    _document_service = None


def get_gate() -> AuthorizationGate:
    if _gate is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _gate


def get_document_service() -> DocumentService:
    if _document_service is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _document_service
