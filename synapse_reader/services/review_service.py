"""
Review Service - spaced repetition cards built from interactions
"""

import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from synapse_reader.core.exceptions import NotFoundError
from synapse_reader.models.document import Document
from synapse_reader.models.interaction import Interaction
from synapse_reader.models.review_card import ReviewCard
from synapse_reader.prompts import PromptBuilder
from synapse_reader.services.review_scheduler import schedule_review
from synapse_reader.utils.clock import utcnow

logger = logging.getLogger(__name__)


class ReviewService:
    """Create, schedule and fetch review cards"""

    def __init__(self, db: Session, prompt_builder: Optional[PromptBuilder] = None):
        self.db = db
        self.prompt_builder = prompt_builder or PromptBuilder()

    def create(self, interaction_id: str, question: str, answer: str) -> ReviewCard:
        """New card, first due one day from now"""
        card = ReviewCard(
            interaction_id=interaction_id,
            question=question,
            answer=answer,
            next_review_at=utcnow() + timedelta(days=1),
            interval_days=1,
            ease_factor=2.5,
            review_count=0,
        )
        self.db.add(card)
        self.db.commit()
        self.db.refresh(card)
        return card

    def create_from_interaction(self, interaction_id: str) -> ReviewCard:
        """
        Card whose question is derived from the interaction's action and
        selection and whose answer is the AI response

        Raises:
            NotFoundError: Unknown interaction
        """
        interaction = self.db.query(Interaction).filter(Interaction.id == interaction_id).first()
        if not interaction:
            raise NotFoundError(f"Interaction {interaction_id} not found")

        filename = interaction.document.filename if interaction.document else None
        question = self.prompt_builder.build_review_question(
            interaction.selected_text, interaction.action_type, filename
        )
        return self.create(interaction.id, question, interaction.response)

    def get_by_id(self, card_id: str) -> Optional[ReviewCard]:
        return self.db.query(ReviewCard).filter(ReviewCard.id == card_id).first()

    def next(self) -> Optional[Dict[str, Any]]:
        """Earliest due card with its selection, action type and document filename"""
        row = (
            self.db.query(ReviewCard, Interaction.selected_text, Interaction.action_type, Document.filename)
            .join(Interaction, ReviewCard.interaction_id == Interaction.id)
            .join(Document, Interaction.document_id == Document.id)
            .filter(ReviewCard.next_review_at <= utcnow())
            .order_by(ReviewCard.next_review_at.asc())
            .first()
        )
        if row is None:
            return None

        card, selected_text, action_type, filename = row
        return {
            "id": card.id,
            "interaction_id": card.interaction_id,
            "question": card.question,
            "answer": card.answer,
            "next_review_at": card.next_review_at,
            "interval_days": card.interval_days,
            "ease_factor": card.ease_factor,
            "review_count": card.review_count,
            "created_at": card.created_at,
            "selected_text": selected_text,
            "action_type": action_type,
            "filename": filename,
        }

    def update(self, card_id: str, quality: int) -> ReviewCard:
        """
        Record a review and reschedule the card

        Args:
            card_id: Card UUID
            quality: Recall quality 0..5

        Raises:
            NotFoundError: Unknown card
            ValidationError: Quality out of range
        """
        card = self.get_by_id(card_id)
        if not card:
            raise NotFoundError(f"Review card {card_id} not found")

        schedule = schedule_review(quality, card.interval_days, card.ease_factor, card.review_count)

        card.interval_days = schedule.interval_days
        card.ease_factor = schedule.ease_factor
        card.review_count = schedule.repetitions
        card.next_review_at = utcnow() + timedelta(days=schedule.interval_days)

        self.db.commit()
        self.db.refresh(card)
        logger.debug(f"Card {card_id} rescheduled in {schedule.interval_days} day(s)")
        return card

    def due_count(self) -> int:
        return self.db.query(ReviewCard).filter(ReviewCard.next_review_at <= utcnow()).count()

    def all(self) -> List[ReviewCard]:
        return self.db.query(ReviewCard).order_by(ReviewCard.next_review_at.asc()).all()
