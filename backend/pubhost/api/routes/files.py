"""File API routes — catalog listing, delete and move/rename."""

from typing import Optional

from fastapi import APIRouter, Depends

from pubhost.api.deps import get_documents, get_session_token
from pubhost.schemas.auth import SuccessResponse
from pubhost.schemas.files import (
    CatalogResponse,
    DeleteRequest,
    FileItem,
    MoveRequest,
    MutationResponse,
)
from pubhost.services.documents import DocumentService

router = APIRouter()


@router.get("/files", response_model=CatalogResponse)
async def list_files(documents: DocumentService = Depends(get_documents)):
    """All stored documents plus the categories in use. Public."""
    catalog = await documents.list_catalog()
    return CatalogResponse(
        files=[FileItem.from_record(record) for record in catalog.files],
        categories=catalog.categories,
    )


@router.delete("/files", response_model=SuccessResponse)
async def delete_file(
    body: DeleteRequest,
    token: Optional[str] = Depends(get_session_token),
    documents: DocumentService = Depends(get_documents),
):
    await documents.delete(token, body.url)
    return SuccessResponse()


@router.patch("/files", response_model=MutationResponse)
async def move_file(
    body: MoveRequest,
    token: Optional[str] = Depends(get_session_token),
    documents: DocumentService = Depends(get_documents),
):
    """Rename and/or recategorize a document.

    A ``PartialMoveCompleted`` (207) response means the new copy exists but
    the old one could not be removed; retrying the delete is safe.
    """
    result = await documents.move(token, body.url, body.new_pathname)
    return MutationResponse(url=result.url, pathname=result.pathname)
