"""
Concept API endpoints
Saving extracted concepts, the concept graph and AI-based extraction
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from synapse_reader.api.deps import get_db, get_provider_manager
from synapse_reader.providers.manager import ProviderManager
from synapse_reader.schemas.concept import (
    ConceptSave,
    ConceptExtract,
    ConceptResponse,
    DocumentConceptResponse,
    ConceptDocument,
    ConceptGraph,
)
from synapse_reader.services.concept_service import ConceptService

router = APIRouter(prefix="/concepts", tags=["concepts"])


@router.get("/graph", response_model=ConceptGraph)
async def concept_graph(db: Session = Depends(get_db)):
    """Concepts with occurrence totals and co-occurrence links"""
    return ConceptService(db).graph()


@router.post("", response_model=List[ConceptResponse])
async def save_concepts(
    payload: ConceptSave,
    db: Session = Depends(get_db)
):
    """
    Link concepts to an interaction and its document

    Args:
        payload: concept_names, interaction_id, document_id
        db: Database session

    Returns:
        List[ConceptResponse]: Concepts linked by this call
    """
    return ConceptService(db).save_for_interaction(
        payload.concept_names,
        payload.interaction_id,
        payload.document_id
    )


@router.post("/extract", response_model=List[str])
async def extract_concepts(
    payload: ConceptExtract,
    manager: ProviderManager = Depends(get_provider_manager)
):
    """
    Ask the current provider for 3-5 key concepts

    Returns an empty list when no provider is available or the model
    reply holds no JSON array.
    """
    return await ConceptService.extract(manager.get_current(), payload.text, payload.response)


@router.get("/document/{document_id}", response_model=List[DocumentConceptResponse])
async def concepts_for_document(
    document_id: str,
    db: Session = Depends(get_db)
):
    return ConceptService(db).for_document(document_id)


@router.get("/{concept_id}/documents", response_model=List[ConceptDocument])
async def documents_for_concept(
    concept_id: str,
    db: Session = Depends(get_db)
):
    return ConceptService(db).documents_for_concept(concept_id)
