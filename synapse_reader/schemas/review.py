"""
Pydantic Schemas for Review card endpoints
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReviewCardCreate(BaseModel):
    interaction_id: str
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)


class ReviewCardFromInteraction(BaseModel):
    interaction_id: str


class ReviewUpdate(BaseModel):
    """
    Recall quality of one review

    Range checking happens in the scheduler so that a bad grade surfaces as a
    validation error from the domain, not from request parsing.
    """
    quality: int = Field(..., description="0 (blackout) to 5 (perfect recall)")


class ReviewCardResponse(BaseModel):
    id: str
    interaction_id: str
    question: str
    answer: str
    next_review_at: datetime
    interval_days: int
    ease_factor: float
    review_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewCardDue(ReviewCardResponse):
    """Due card with the context it was created from"""
    selected_text: str
    action_type: str
    filename: str


class DueCount(BaseModel):
    count: int


class NextReview(BaseModel):
    card: Optional[ReviewCardDue] = None
