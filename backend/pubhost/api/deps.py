"""FastAPI dependency injection — session token & services."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from pubhost.config import settings
from pubhost.core.auth import AuthorizationGate
from pubhost.services import get_document_service, get_gate
from pubhost.services.documents import DocumentService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Session token from the session cookie, else from a Bearer header."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    if credentials:
        return credentials.credentials
    return None


def get_documents() -> DocumentService:
    return get_document_service()


def get_authorization_gate() -> AuthorizationGate:
    return get_gate()
