"""
Pydantic Schemas for Request/Response Validation

Document Schemas: DocumentOpen, DocumentUpdate, DocumentResponse
Interaction Schemas: InteractionCreate, InteractionResponse, ActivityDay, DocumentStats
Concept Schemas: ConceptSave, ConceptExtract, ConceptGraph
Review Schemas: ReviewCardCreate, ReviewUpdate, ReviewCardResponse, ReviewCardDue
Annotation Schemas: HighlightCreate/Update/Response, BookmarkToggle/Response
Conversation Schemas: ConversationCreate, MessageCreate, ConversationSummary
Workspace Schemas: WorkspaceCreate/Update/Response, SourceCreate/Response
Search Schemas: SearchResults and per-type hits
AI Schemas: AIQueryRequest, StreamEvent, provider and key schemas
"""

from synapse_reader.schemas.ai import AIQueryRequest, StreamEvent
from synapse_reader.schemas.document import DocumentResponse, InteractionResponse
from synapse_reader.schemas.search import SearchResults

__all__ = ["AIQueryRequest", "StreamEvent", "DocumentResponse", "InteractionResponse", "SearchResults"]
