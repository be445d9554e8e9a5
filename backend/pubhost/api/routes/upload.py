"""Upload route."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from pubhost.api.deps import get_documents, get_session_token
from pubhost.schemas.files import MutationResponse
from pubhost.services.documents import DocumentService

router = APIRouter()


@router.post("/upload", response_model=MutationResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    category: Optional[str] = Form(None),
    token: Optional[str] = Depends(get_session_token),
    documents: DocumentService = Depends(get_documents),
):
    """Store an HTML file under ``category/filename``, overwriting any existing one."""
    filename = file.filename if file else ""
    content = await file.read() if file else b""
    result = await documents.upload(token, filename or "", content, category)
    return MutationResponse(url=result.url, pathname=result.pathname)
