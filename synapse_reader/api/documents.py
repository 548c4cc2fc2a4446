"""
Document API endpoints
Open (get-or-create), reading state, recent documents and the PDF file itself
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session
from typing import List

from synapse_reader.api.deps import get_db
from synapse_reader.schemas.document import DocumentOpen, DocumentUpdate, DocumentResponse
from synapse_reader.services.document_service import DocumentService
from synapse_reader.core.exceptions import http_404_not_found

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=DocumentResponse)
async def open_document(
    document: DocumentOpen,
    db: Session = Depends(get_db)
):
    """
    Get or create a document by filepath

    An already known filepath returns the existing document with
    last_opened_at bumped (and total_pages updated when given).

    Args:
        document: filename, filepath and optional total_pages
        db: Database session

    Returns:
        DocumentResponse: Existing or new document
    """
    return DocumentService(db).get_or_create(
        filename=document.filename,
        filepath=document.filepath,
        total_pages=document.total_pages
    )


@router.get("/recent", response_model=List[DocumentResponse])
async def recent_documents(
    limit: int = 3,
    db: Session = Depends(get_db)
):
    """Most recently opened documents"""
    return DocumentService(db).get_recent(limit)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    db: Session = Depends(get_db)
):
    """
    Get document by ID

    Raises:
        HTTPException: 404 if not found
    """
    document = DocumentService(db).get_by_id(document_id)
    if not document:
        raise http_404_not_found(f"Document {document_id} not found")
    return document


@router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str,
    update: DocumentUpdate,
    db: Session = Depends(get_db)
):
    """
    Update reading state (scroll position, page count)

    Raises:
        HTTPException: 404 if not found
    """
    document = DocumentService(db).update(
        document_id,
        scroll_position=update.scroll_position,
        total_pages=update.total_pages
    )
    if not document:
        raise http_404_not_found(f"Document {document_id} not found")
    return document


@router.get("/{document_id}/file")
async def read_document_file(
    document_id: str,
    db: Session = Depends(get_db)
):
    """
    Stream the PDF bytes of a document

    Raises:
        NotFoundError: Unknown document or file missing on disk (404)
    """
    path = DocumentService(db).get_file_path(document_id)
    return FileResponse(path, media_type="application/pdf", filename=path.name)
