"""
Highlight and Bookmark Services - reader annotations
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from synapse_reader.core.exceptions import ValidationError
from synapse_reader.models.highlight import Bookmark, Highlight, HIGHLIGHT_COLORS
from synapse_reader.utils.clock import utcnow


def _check_color(color: str) -> None:
    if color not in HIGHLIGHT_COLORS:
        raise ValidationError(f"Invalid highlight color '{color}'. Must be one of: {', '.join(HIGHLIGHT_COLORS)}")


class HighlightService:
    """Text highlights with optional notes"""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        document_id: str,
        page_number: int,
        start_offset: int,
        end_offset: int,
        selected_text: str,
        color: str = "yellow",
        note: Optional[str] = None,
    ) -> Highlight:
        _check_color(color)
        highlight = Highlight(
            document_id=document_id,
            page_number=page_number,
            start_offset=start_offset,
            end_offset=end_offset,
            selected_text=selected_text,
            color=color,
            note=note or None,
        )
        self.db.add(highlight)
        self.db.commit()
        self.db.refresh(highlight)
        return highlight

    def get_by_id(self, highlight_id: str) -> Optional[Highlight]:
        return self.db.query(Highlight).filter(Highlight.id == highlight_id).first()

    def update(self, highlight_id: str, color: Optional[str] = None, note: Optional[str] = None) -> Optional[Highlight]:
        """
        Change color and/or note; an empty note clears it

        Returns:
            Updated highlight, or None when not found
        """
        highlight = self.get_by_id(highlight_id)
        if not highlight:
            return None

        if color is not None:
            _check_color(color)
            highlight.color = color
        if note is not None:
            highlight.note = note or None
        highlight.updated_at = utcnow()

        self.db.commit()
        self.db.refresh(highlight)
        return highlight

    def delete(self, highlight_id: str) -> bool:
        deleted = self.db.query(Highlight).filter(Highlight.id == highlight_id).delete()
        self.db.commit()
        return deleted > 0

    def by_document(self, document_id: str) -> List[Highlight]:
        return (
            self.db.query(Highlight)
            .filter(Highlight.document_id == document_id)
            .order_by(Highlight.page_number.asc(), Highlight.start_offset.asc())
            .all()
        )

    def by_page(self, document_id: str, page_number: int) -> List[Highlight]:
        return (
            self.db.query(Highlight)
            .filter(Highlight.document_id == document_id, Highlight.page_number == page_number)
            .order_by(Highlight.start_offset.asc())
            .all()
        )

    def with_notes(self, document_id: str) -> List[Highlight]:
        return (
            self.db.query(Highlight)
            .filter(Highlight.document_id == document_id, Highlight.note.isnot(None))
            .order_by(Highlight.page_number.asc(), Highlight.start_offset.asc())
            .all()
        )


class BookmarkService:
    """Page bookmarks, one per (document, page)"""

    def __init__(self, db: Session):
        self.db = db

    def toggle(self, document_id: str, page_number: int, label: Optional[str] = None) -> Optional[Bookmark]:
        """
        Remove the page's bookmark if there is one, otherwise create it

        Returns:
            The new bookmark, or None when an existing one was removed
        """
        existing = (
            self.db.query(Bookmark)
            .filter(Bookmark.document_id == document_id, Bookmark.page_number == page_number)
            .first()
        )
        if existing:
            self.db.delete(existing)
            self.db.commit()
            return None

        bookmark = Bookmark(document_id=document_id, page_number=page_number, label=label)
        self.db.add(bookmark)
        self.db.commit()
        self.db.refresh(bookmark)
        return bookmark

    def update_label(self, bookmark_id: str, label: Optional[str]) -> bool:
        updated = self.db.query(Bookmark).filter(Bookmark.id == bookmark_id).update({"label": label})
        self.db.commit()
        return updated > 0

    def delete(self, bookmark_id: str) -> bool:
        deleted = self.db.query(Bookmark).filter(Bookmark.id == bookmark_id).delete()
        self.db.commit()
        return deleted > 0

    def by_document(self, document_id: str) -> List[Bookmark]:
        return (
            self.db.query(Bookmark)
            .filter(Bookmark.document_id == document_id)
            .order_by(Bookmark.page_number.asc())
            .all()
        )

    def is_page_bookmarked(self, document_id: str, page_number: int) -> bool:
        return (
            self.db.query(Bookmark.id)
            .filter(Bookmark.document_id == document_id, Bookmark.page_number == page_number)
            .first()
            is not None
        )
