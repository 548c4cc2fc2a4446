"""
Bookmark API endpoints
One bookmark per (document, page)
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from synapse_reader.api.deps import get_db
from synapse_reader.schemas.annotation import (
    BookmarkToggle,
    BookmarkLabelUpdate,
    BookmarkResponse,
    BookmarkToggleResponse,
    PageBookmarked,
)
from synapse_reader.services.highlight_service import BookmarkService
from synapse_reader.core.exceptions import http_404_not_found

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.post("/toggle", response_model=BookmarkToggleResponse)
async def toggle_bookmark(
    payload: BookmarkToggle,
    db: Session = Depends(get_db)
):
    """
    Bookmark a page, or remove its bookmark if it has one

    Returns:
        BookmarkToggleResponse: bookmarked=False and bookmark=null after a removal
    """
    bookmark = BookmarkService(db).toggle(payload.document_id, payload.page_number, payload.label)
    return {"bookmarked": bookmark is not None, "bookmark": bookmark}


@router.patch("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_bookmark_label(
    bookmark_id: str,
    update: BookmarkLabelUpdate,
    db: Session = Depends(get_db)
):
    if not BookmarkService(db).update_label(bookmark_id, update.label):
        raise http_404_not_found(f"Bookmark {bookmark_id} not found")
    return None


@router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(
    bookmark_id: str,
    db: Session = Depends(get_db)
):
    if not BookmarkService(db).delete(bookmark_id):
        raise http_404_not_found(f"Bookmark {bookmark_id} not found")
    return None


@router.get("/document/{document_id}", response_model=List[BookmarkResponse])
async def bookmarks_by_document(
    document_id: str,
    db: Session = Depends(get_db)
):
    """Bookmarks of a document in page order"""
    return BookmarkService(db).by_document(document_id)


@router.get("/document/{document_id}/page/{page_number}", response_model=PageBookmarked)
async def is_page_bookmarked(
    document_id: str,
    page_number: int,
    db: Session = Depends(get_db)
):
    return {"bookmarked": BookmarkService(db).is_page_bookmarked(document_id, page_number)}
