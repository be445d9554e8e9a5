"""Health check."""

from fastapi import APIRouter

from pubhost import __version__
from pubhost.config import settings
from pubhost.schemas.system import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Lightweight connectivity check."""
    return HealthResponse(version=__version__, store_mode=settings.mode)


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
