"""
Business logic services

Services:
    - DocumentService: documents opened in the reader
    - InteractionService: AI query history and activity stats
    - ConceptService: concept extraction and the concept graph
    - ReviewService: spaced repetition cards (scheduled by schedule_review)
    - HighlightService / BookmarkService: reader annotations
    - ConversationService: persistent AI conversations
    - WorkspaceService: multi-document workspaces and conversation sources
    - SearchService: FTS5 full-text search
    - AIService: streaming AI queries with cancellation
    - selection_content_type / detect_content: equations, code and STEM terms in text
"""

from synapse_reader.services.review_scheduler import schedule_review, ReviewSchedule
from synapse_reader.services.document_service import DocumentService
from synapse_reader.services.interaction_service import InteractionService
from synapse_reader.services.concept_service import ConceptService
from synapse_reader.services.review_service import ReviewService
from synapse_reader.services.highlight_service import HighlightService, BookmarkService
from synapse_reader.services.conversation_service import ConversationService
from synapse_reader.services.workspace_service import WorkspaceService
from synapse_reader.services.search_service import SearchService
from synapse_reader.services.ai_service import AIService, StreamRegistry
from synapse_reader.services.content_detector import detect_content, selection_content_type

__all__ = [
    "schedule_review",
    "ReviewSchedule",
    "DocumentService",
    "InteractionService",
    "ConceptService",
    "ReviewService",
    "HighlightService",
    "BookmarkService",
    "ConversationService",
    "WorkspaceService",
    "SearchService",
    "AIService",
    "StreamRegistry",
    "detect_content",
    "selection_content_type",
]
