"""
ReviewCard Model - spaced repetition flashcards
"""

from sqlalchemy import Column, String, Text, Integer, Float, ForeignKey, DateTime, Index
from sqlalchemy.orm import relationship

from synapse_reader.database import Base
from synapse_reader.utils.clock import new_id, utcnow


class ReviewCard(Base):
    """
    Review card model - flashcard scheduled with SM-2

    Attributes:
        id: Card UUID
        interaction_id: Interaction the card was generated from
        question: Prompt side
        answer: Answer side
        next_review_at: When the card is due next
        interval_days: Current interval in days
        ease_factor: SM-2 ease factor (>= 1.3)
        review_count: Consecutive successful reviews (reset on a lapse)
        created_at: Creation timestamp
    """

    __tablename__ = "review_cards"
    __table_args__ = (
        Index("idx_review_cards_next", "next_review_at"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    interaction_id = Column(String(36), ForeignKey("interactions.id"), nullable=False)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    next_review_at = Column(DateTime, nullable=False)
    interval_days = Column(Integer, default=1)
    ease_factor = Column(Float, default=2.5)
    review_count = Column(Integer, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    interaction = relationship("Interaction", back_populates="review_cards")

    def __repr__(self):
        return f"<ReviewCard(id={self.id}, next_review_at={self.next_review_at})>"
