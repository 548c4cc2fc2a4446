"""
Highlight and Bookmark Models - reader annotations
"""

from sqlalchemy import Column, String, Text, Integer, ForeignKey, DateTime, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from synapse_reader.database import Base
from synapse_reader.utils.clock import new_id, utcnow


HIGHLIGHT_COLORS = ("yellow", "green", "blue", "pink", "purple")


class Highlight(Base):
    """
    Highlight model - persistent text highlight with an optional note

    Attributes:
        id: Highlight UUID
        document_id: Parent document (cascade delete)
        page_number: Page of the highlight
        start_offset / end_offset: Character offsets within the page text layer
        selected_text: Highlighted text
        color: One of HIGHLIGHT_COLORS
        note: Free-form note (NULL when empty)
        created_at / updated_at: Timestamps
    """

    __tablename__ = "highlights"
    __table_args__ = (
        Index("idx_highlights_doc", "document_id"),
        Index("idx_highlights_page", "document_id", "page_number"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False)
    page_number = Column(Integer, nullable=False)
    start_offset = Column(Integer, nullable=False)
    end_offset = Column(Integer, nullable=False)
    selected_text = Column(Text, nullable=False)
    color = Column(String, nullable=False, default="yellow")
    note = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    document = relationship("Document", back_populates="highlights")

    def __repr__(self):
        return f"<Highlight(id={self.id}, page={self.page_number}, color={self.color})>"


class Bookmark(Base):
    """
    Bookmark model - one per (document, page)
    """

    __tablename__ = "bookmarks"
    __table_args__ = (
        UniqueConstraint("document_id", "page_number", name="uq_bookmark_document_page"),
        Index("idx_bookmarks_doc", "document_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False)
    page_number = Column(Integer, nullable=False)
    label = Column(String)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    document = relationship("Document", back_populates="bookmarks")

    def __repr__(self):
        return f"<Bookmark(id={self.id}, page={self.page_number})>"
