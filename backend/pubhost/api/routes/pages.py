"""Browser-facing pages and the public document view route."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from pubhost.api.deps import get_documents
from pubhost.config import settings
from pubhost.core.errors import NotFound
from pubhost.rendering import render_admin, render_index, render_login
from pubhost.services.documents import DocumentService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(documents: DocumentService = Depends(get_documents)):
    catalog = await documents.list_catalog()
    return render_index(catalog, settings.app_name)


@router.get("/login", response_class=HTMLResponse, include_in_schema=False)
async def login_page():
    return render_login(settings.app_name, settings.api_prefix)


@router.get("/admin", response_class=HTMLResponse, include_in_schema=False)
async def admin_page(documents: DocumentService = Depends(get_documents)):
    """Admin screen. Access is checked by the /admin pre-filter in main."""
    catalog = await documents.list_catalog()
    return render_admin(catalog, settings.app_name, settings.api_prefix)


@router.get("/view/{path:path}", include_in_schema=False)
async def view_document(path: str, documents: DocumentService = Depends(get_documents)):
    """Serve a stored document by its extension-less public route."""
    try:
        record, content = await documents.resolve_view(path)
    except NotFound:
        logger.debug("View miss: /view/%s", path)
        return PlainTextResponse("Not found", status_code=404)

    logger.debug("Serving /view/%s from %s", path, record.pathname)
    return Response(
        content=content,
        media_type="text/html",
        headers={"Cache-Control": f"public, max-age={settings.view_cache_max_age}"},
    )
