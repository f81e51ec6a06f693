import asyncio
import logging
import mimetypes

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse
from starlette.datastructures import UploadFile

from docportal.dependencies import get_document_store
from docportal.exceptions import DocumentPortalError, ValidationError
from docportal.models.document import Document
from docportal.schemas.document import DocumentSummary, MessageResponse, UploadFailure, UploadResponse
from docportal.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


def _doc_to_summary(doc: Document) -> DocumentSummary:
    return DocumentSummary(
        id=doc.id,
        filename=doc.filename,
        filesize=doc.filesize,
        created_at=doc.created_at,
    )


@router.post("/upload", response_model=UploadResponse)
async def upload_documents(request: Request, store: DocumentStore = Depends(get_document_store)):
    """Store every multipart part named ``file``.

    All parts are created concurrently and the response is sent once each
    of them has either been stored or failed. Failed parts are reported in
    ``failed`` and do not affect the others.
    """
    form = await request.form()
    parts = [p for p in form.getlist("file") if isinstance(p, UploadFile)]
    if not parts:
        raise ValidationError("No file uploaded.")

    uploads = []
    for part in parts:
        content = await part.read()
        uploads.append((part.filename or "", content, part.content_type))

    results = await asyncio.gather(
        *(
            run_in_threadpool(store.create, name, content, len(content), content_type)
            for name, content, content_type in uploads
        ),
        return_exceptions=True,
    )

    documents: list[DocumentSummary] = []
    failed: list[UploadFailure] = []
    unexpected: BaseException | None = None
    for (name, _, _), result in zip(uploads, results):
        if isinstance(result, DocumentPortalError):
            logger.error("Upload of %r failed: %s", name, result)
            failed.append(UploadFailure(filename=name, error=result.message))
        elif isinstance(result, BaseException):
            unexpected = unexpected or result
        else:
            documents.append(_doc_to_summary(result))

    if unexpected is not None:
        logger.error(
            "Upload aborted by %s; documents already stored: %s",
            type(unexpected).__name__,
            [d.id for d in documents],
        )
        raise unexpected

    return UploadResponse(
        message="File(s) uploaded successfully",
        documents=documents,
        failed=failed,
    )


@router.get("/upload", response_model=list[DocumentSummary])
async def list_documents(store: DocumentStore = Depends(get_document_store)):
    return [_doc_to_summary(d) for d in store.list()]


@router.get("/{doc_id}")
async def download_document(doc_id: int, store: DocumentStore = Depends(get_document_store)):
    doc = store.get(doc_id)
    full_path = store.blob_path(doc)
    media_type = doc.content_type or mimetypes.guess_type(doc.filename)[0] or "application/octet-stream"
    return FileResponse(
        path=str(full_path),
        filename=doc.filename,
        media_type=media_type,
    )


@router.delete("/{doc_id}", response_model=MessageResponse)
async def delete_document(doc_id: int, store: DocumentStore = Depends(get_document_store)):
    store.delete(doc_id)
    return MessageResponse(message="Document deleted")
