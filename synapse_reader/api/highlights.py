"""
Highlight API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from synapse_reader.api.deps import get_db
from synapse_reader.schemas.annotation import HighlightCreate, HighlightUpdate, HighlightResponse
from synapse_reader.services.highlight_service import HighlightService
from synapse_reader.core.exceptions import http_404_not_found

router = APIRouter(prefix="/highlights", tags=["highlights"])


@router.post("", response_model=HighlightResponse, status_code=status.HTTP_201_CREATED)
async def create_highlight(
    highlight: HighlightCreate,
    db: Session = Depends(get_db)
):
    return HighlightService(db).create(**highlight.model_dump())


@router.patch("/{highlight_id}", response_model=HighlightResponse)
async def update_highlight(
    highlight_id: str,
    update: HighlightUpdate,
    db: Session = Depends(get_db)
):
    """
    Change color and/or note (an empty note clears it)

    Raises:
        HTTPException: 404 if not found
    """
    highlight = HighlightService(db).update(highlight_id, color=update.color, note=update.note)
    if not highlight:
        raise http_404_not_found(f"Highlight {highlight_id} not found")
    return highlight


@router.delete("/{highlight_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_highlight(
    highlight_id: str,
    db: Session = Depends(get_db)
):
    """
    Delete a highlight; conversations anchored on it are kept

    Raises:
        HTTPException: 404 if not found
    """
    if not HighlightService(db).delete(highlight_id):
        raise http_404_not_found(f"Highlight {highlight_id} not found")
    return None


@router.get("/document/{document_id}", response_model=List[HighlightResponse])
async def highlights_by_document(
    document_id: str,
    db: Session = Depends(get_db)
):
    return HighlightService(db).by_document(document_id)


@router.get("/document/{document_id}/page/{page_number}", response_model=List[HighlightResponse])
async def highlights_by_page(
    document_id: str,
    page_number: int,
    db: Session = Depends(get_db)
):
    return HighlightService(db).by_page(document_id, page_number)


@router.get("/document/{document_id}/notes", response_model=List[HighlightResponse])
async def highlights_with_notes(
    document_id: str,
    db: Session = Depends(get_db)
):
    return HighlightService(db).with_notes(document_id)
