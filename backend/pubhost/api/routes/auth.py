"""Auth routes — admin login and logout via a signed session cookie."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from pubhost.api.deps import get_authorization_gate
from pubhost.config import settings
from pubhost.core.auth import AuthorizationGate, verify_password
from pubhost.schemas.auth import LoginRequest, SuccessResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/auth", response_model=SuccessResponse)
async def login(
    body: LoginRequest,
    response: Response,
    gate: AuthorizationGate = Depends(get_authorization_gate),
):
    """Check the admin password and issue the session cookie."""
    if not verify_password(body.password, settings.admin_password):
        logger.warning("Rejected admin login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password",
        )

    response.set_cookie(
        key=settings.session_cookie_name,
        value=gate.issue_token(),
        max_age=gate.max_age_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )
    logger.info("Admin session issued")
    return SuccessResponse()


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response):
    response.delete_cookie(settings.session_cookie_name, path="/")
    return SuccessResponse()
