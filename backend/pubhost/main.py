"""pubhost FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from pubhost import __version__
from pubhost.config import settings
from pubhost.core.errors import PortalError
from pubhost.services import get_gate, init_services, shutdown_services

logger = logging.getLogger(__name__)

ADMIN_PREFIX = "/admin"
LOGIN_PATH = "/login"


@asynccontextmanager
async def _lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    # === STARTUP ===
    _setup_logging()
    await init_services()
    logger.info("pubhost v%s started — listening on %s:%s", __version__, settings.host, settings.port)

    try:
        yield
    finally:
        # === SHUTDOWN ===
        await shutdown_services()
        logger.info("pubhost shutting down")


def _setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


async def _portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.message)
    else:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _admin_prefilter(request: Request, call_next):
    """Block the admin interface before routing unless a valid session is present."""
    if request.url.path.startswith(ADMIN_PREFIX):
        token = request.cookies.get(settings.session_cookie_name)
        if not get_gate().is_authorized(token):
            return RedirectResponse(LOGIN_PATH, status_code=303)
    return await call_next(request)


def create_app() -> FastAPI:
    """Application factory."""
    from pubhost.api.routes import api_router
    from pubhost.api.routes.pages import router as pages_router

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=_lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(_admin_prefilter)
    app.add_exception_handler(PortalError, _portal_error_handler)

    app.include_router(api_router, prefix=settings.api_prefix)
    app.include_router(pages_router)

    return app


app = create_app()


def run(**kwargs: Any) -> None:
    import uvicorn

    uvicorn.run(
        "pubhost.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.uvicorn_workers,
        log_level=settings.log_level.lower(),
        **kwargs,
    )


if __name__ == "__main__":
    run()
