"""
Pydantic Schemas for Search endpoints
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class DocumentHit(BaseModel):
    id: str
    filename: str
    filepath: str
    last_opened_at: datetime
    rank: float


class InteractionHit(BaseModel):
    id: str
    document_id: str
    action_type: str
    selected_text: str
    response: str
    page_number: Optional[int] = None
    created_at: datetime
    filename: str
    rank: float
    snippet: str


class ConceptHit(BaseModel):
    id: str
    name: str
    created_at: datetime
    rank: float


class SearchResults(BaseModel):
    documents: List[DocumentHit] = []
    interactions: List[InteractionHit] = []
    concepts: List[ConceptHit] = []
