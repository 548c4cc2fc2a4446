"""
Pydantic Schemas for Concept endpoints
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ConceptSave(BaseModel):
    concept_names: List[str] = Field(..., description="Names; trimmed and deduplicated case-insensitively")
    interaction_id: str
    document_id: str


class ConceptExtract(BaseModel):
    text: str = Field(..., min_length=1, description="Selected text")
    response: str = Field(..., description="AI response to that selection")


class ConceptResponse(BaseModel):
    id: str
    name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DocumentConceptResponse(ConceptResponse):
    occurrence_count: int


class ConceptDocument(BaseModel):
    id: str
    filename: str
    occurrence_count: int


class ConceptNode(BaseModel):
    id: str
    name: str
    total_occurrences: int
    document_count: int


class ConceptLink(BaseModel):
    source: str
    target: str
    weight: int


class ConceptGraph(BaseModel):
    """Concepts and their co-occurrence links"""
    nodes: List[ConceptNode]
    links: List[ConceptLink]
