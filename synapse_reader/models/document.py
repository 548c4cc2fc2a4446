"""
Document Model - PDF files opened in the reader
"""

from sqlalchemy import Column, String, Integer, Float, DateTime, Index
from sqlalchemy.orm import relationship

from synapse_reader.database import Base
from synapse_reader.utils.clock import new_id, utcnow


class Document(Base):
    """
    Document model - one row per PDF file ever opened

    Attributes:
        id: Unique document identifier (UUID text)
        filename: Display name of the file
        filepath: Absolute path on disk (unique, used to re-open the same file)
        last_opened_at: Last time the file was opened
        scroll_position: Last reading position (fraction or pixel offset, client defined)
        total_pages: Page count reported by the viewer
        created_at: First open timestamp

    Relationships:
        interactions: AI queries made on this document
        highlights: Text highlights (cascade delete)
        bookmarks: Page bookmarks (cascade delete)
        conversations: Persistent AI conversations (cascade delete)
    """

    __tablename__ = "documents"
    __table_args__ = (
        Index("idx_documents_last_opened", "last_opened_at"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    filename = Column(String, nullable=False)
    filepath = Column(String, nullable=False, unique=True)
    last_opened_at = Column(DateTime, nullable=False, default=utcnow)
    scroll_position = Column(Float, default=0)
    total_pages = Column(Integer)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    interactions = relationship("Interaction", back_populates="document")
    highlights = relationship("Highlight", back_populates="document", passive_deletes=True)
    bookmarks = relationship("Bookmark", back_populates="document", passive_deletes=True)
    conversations = relationship("Conversation", back_populates="document", passive_deletes=True)

    def __repr__(self):
        return f"<Document(id={self.id}, filename={self.filename})>"
