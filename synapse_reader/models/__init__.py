"""
SQLAlchemy Database Models

All models use UUID text primary keys and naive UTC timestamps.

Models:
    - Document: PDF files opened in the reader
    - Interaction: AI queries on a document selection
    - Concept / InteractionConcept / DocumentConcept: extracted key terms
    - ReviewCard: spaced repetition flashcards
    - Highlight / Bookmark: reader annotations
    - Conversation / ConversationMessage / ConversationSource: AI conversations
    - Workspace / WorkspaceDocument: multi-document groups

Relationships:
    Document 1:N Interaction, Highlight, Bookmark, Conversation
    Interaction 1:N ReviewCard
    Interaction N:M Concept, Document N:M Concept
    Conversation 1:N ConversationMessage, ConversationSource
    Workspace N:M Document, Workspace 1:N Conversation

Cascade Deletes:
    - Delete Document → Highlights, Bookmarks, Conversations, workspace links
    - Delete Conversation → Messages, Sources
    - Delete Workspace → workspace links
    - Delete Highlight → conversation.highlight_id set NULL
"""

from synapse_reader.models.document import Document
from synapse_reader.models.interaction import Interaction
from synapse_reader.models.concept import Concept, InteractionConcept, DocumentConcept
from synapse_reader.models.review_card import ReviewCard
from synapse_reader.models.highlight import Highlight, Bookmark
from synapse_reader.models.conversation import Conversation, ConversationMessage, ConversationSource
from synapse_reader.models.workspace import Workspace, WorkspaceDocument

__all__ = [
    "Document", "Interaction", "Concept", "InteractionConcept", "DocumentConcept",
    "ReviewCard", "Highlight", "Bookmark", "Conversation", "ConversationMessage",
    "ConversationSource", "Workspace", "WorkspaceDocument",
]
