"""
Review API endpoints
Spaced repetition cards scheduled with SM-2
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from synapse_reader.api.deps import get_db
from synapse_reader.schemas.review import (
    ReviewCardCreate,
    ReviewCardFromInteraction,
    ReviewUpdate,
    ReviewCardResponse,
    DueCount,
    NextReview,
)
from synapse_reader.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("", response_model=ReviewCardResponse, status_code=status.HTTP_201_CREATED)
async def create_card(
    card: ReviewCardCreate,
    db: Session = Depends(get_db)
):
    """Create a card, first due one day from now"""
    return ReviewService(db).create(card.interaction_id, card.question, card.answer)


@router.post("/from-interaction", response_model=ReviewCardResponse, status_code=status.HTTP_201_CREATED)
async def create_card_from_interaction(
    payload: ReviewCardFromInteraction,
    db: Session = Depends(get_db)
):
    """
    Create a card from an interaction

    The question is derived from the action type and selection; the answer
    is the AI response.

    Raises:
        NotFoundError: Unknown interaction (404)
    """
    return ReviewService(db).create_from_interaction(payload.interaction_id)


@router.get("/next", response_model=NextReview)
async def next_card(db: Session = Depends(get_db)):
    """Earliest due card, or card=null when nothing is due"""
    return {"card": ReviewService(db).next()}


@router.get("/due-count", response_model=DueCount)
async def due_count(db: Session = Depends(get_db)):
    return {"count": ReviewService(db).due_count()}


@router.get("", response_model=List[ReviewCardResponse])
async def all_cards(db: Session = Depends(get_db)):
    """All cards, soonest due first"""
    return ReviewService(db).all()


@router.post("/{card_id}/review", response_model=ReviewCardResponse)
async def review_card(
    card_id: str,
    review: ReviewUpdate,
    db: Session = Depends(get_db)
):
    """
    Record a review and reschedule the card

    Raises:
        NotFoundError: Unknown card (404)
        ValidationError: Quality not an integer in 0..5 (400)
    """
    return ReviewService(db).update(card_id, review.quality)
