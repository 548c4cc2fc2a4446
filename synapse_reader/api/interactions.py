"""
Interaction API endpoints
AI query history and reading activity
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from synapse_reader.api.deps import get_db
from synapse_reader.schemas.document import (
    InteractionCreate,
    InteractionResponse,
    InteractionWithFilename,
    ActivityDay,
    DocumentStats,
)
from synapse_reader.services.interaction_service import InteractionService

router = APIRouter(prefix="/interactions", tags=["interactions"])


@router.post("", response_model=InteractionResponse, status_code=status.HTTP_201_CREATED)
async def save_interaction(
    interaction: InteractionCreate,
    db: Session = Depends(get_db)
):
    """
    Save an interaction

    Raises:
        IntegrityError: Unknown document (409)
    """
    return InteractionService(db).save(**interaction.model_dump())


@router.get("/recent", response_model=List[InteractionWithFilename])
async def recent_interactions(
    limit: int = 50,
    db: Session = Depends(get_db)
):
    """Latest interactions across all documents"""
    return InteractionService(db).recent(limit)


@router.get("/activity", response_model=List[ActivityDay])
async def activity_by_day(
    days: int = 90,
    db: Session = Depends(get_db)
):
    """Per-day counts by action type over the last `days` days"""
    return InteractionService(db).activity_by_day(days)


@router.get("/stats", response_model=List[DocumentStats])
async def document_stats(db: Session = Depends(get_db)):
    """Per-document interaction totals"""
    return InteractionService(db).document_stats()


@router.get("/document/{document_id}", response_model=List[InteractionResponse])
async def interactions_by_document(
    document_id: str,
    db: Session = Depends(get_db)
):
    """Interactions of one document, newest first"""
    return InteractionService(db).by_document(document_id)
