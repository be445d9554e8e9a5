"""API route registration."""

from fastapi import APIRouter

from pubhost.api.routes import auth, files, health, upload

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(files.router, tags=["files"])
api_router.include_router(upload.router, tags=["files"])
