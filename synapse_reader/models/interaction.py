"""
Interaction Model - every AI query made on a document selection
"""

from sqlalchemy import Column, String, Text, Integer, Float, ForeignKey, DateTime, Index
from sqlalchemy.orm import relationship

from synapse_reader.database import Base
from synapse_reader.utils.clock import new_id, utcnow


# Actions that are recorded as interactions
INTERACTION_ACTIONS = ("explain", "summarize", "define")


class Interaction(Base):
    """
    Interaction model - one AI query (explain/summarize/define)

    Attributes:
        id: Interaction UUID
        document_id: Document the selection came from
        action_type: explain, summarize or define
        selected_text: Text the user selected
        page_context: Surrounding page text sent as context
        response: Full AI response
        page_number: Page of the selection
        scroll_position: Viewer position when the query was made
        created_at: Query timestamp

    Relationships:
        document: Parent document (many-to-one)
        review_cards: Flashcards generated from this interaction
    """

    __tablename__ = "interactions"
    __table_args__ = (
        Index("idx_interactions_doc", "document_id"),
        Index("idx_interactions_created", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    document_id = Column(String(36), ForeignKey("documents.id"), nullable=False)
    action_type = Column(String, nullable=False)
    selected_text = Column(Text, nullable=False)
    page_context = Column(Text)
    response = Column(Text, nullable=False)
    page_number = Column(Integer)
    scroll_position = Column(Float)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    document = relationship("Document", back_populates="interactions")
    review_cards = relationship("ReviewCard", back_populates="interaction")

    def __repr__(self):
        return f"<Interaction(id={self.id}, action_type={self.action_type}, document_id={self.document_id})>"
