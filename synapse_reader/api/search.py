"""
Search API endpoints
Full-text search over documents, interactions and concepts
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from synapse_reader.api.deps import get_db
from synapse_reader.schemas.search import DocumentHit, InteractionHit, ConceptHit, SearchResults
from synapse_reader.services.search_service import SearchService

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=SearchResults)
async def search_all(
    q: str = Query(..., description="Free-text query"),
    limit_per_type: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """
    Search every index at once

    Each term matches as a prefix; FTS operators in the query are ignored.
    """
    return SearchService(db).all(q, limit_per_type)


@router.get("/documents", response_model=List[DocumentHit])
async def search_documents(
    q: str,
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    return SearchService(db).documents(q, limit)


@router.get("/interactions", response_model=List[InteractionHit])
async def search_interactions(
    q: str,
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Interactions with filename and a <mark>-highlighted snippet"""
    return SearchService(db).interactions(q, limit)


@router.get("/concepts", response_model=List[ConceptHit])
async def search_concepts(
    q: str,
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    return SearchService(db).concepts(q, limit)


@router.get("/documents/{document_id}/interactions", response_model=List[InteractionHit])
async def search_interactions_in_document(
    document_id: str,
    q: str,
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    return SearchService(db).interactions_in_document(document_id, q, limit)
