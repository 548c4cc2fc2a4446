"""
API Routes and Endpoints

Routers:
    - documents: Open documents, reading state, PDF file
    - interactions: AI query history and activity
    - concepts: Concept graph and extraction
    - reviews: Spaced repetition cards
    - highlights / bookmarks: Reader annotations
    - conversations: Conversations, messages and sources
    - workspaces: Multi-document workspaces
    - search: Full-text search
    - ai: Streaming queries and cancellation
    - providers: Provider selection and API keys
    - terms: Technical term detection
"""

from synapse_reader.api import (
    documents,
    interactions,
    concepts,
    reviews,
    highlights,
    bookmarks,
    conversations,
    workspaces,
    search,
    ai,
    providers,
    terms,
)

__all__ = [
    "documents", "interactions", "concepts", "reviews", "highlights", "bookmarks",
    "conversations", "workspaces", "search", "ai", "providers", "terms",
]
