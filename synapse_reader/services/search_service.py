"""
Search Service - FTS5 full-text search over documents, interactions and concepts

User input is turned into a prefix query: FTS5 operator characters are
stripped and every remaining term is matched as a quoted prefix ("term"*).
"""

import logging
import re
from typing import Any, Dict, List

from sqlalchemy import DateTime, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from synapse_reader.config import settings

logger = logging.getLogger(__name__)

FTS_SPECIAL_CHARS = re.compile(r'[":*^~()]')

DOCUMENTS_SQL = """
    SELECT d.id, d.filename, d.filepath, d.last_opened_at, rank
    FROM documents_fts
    JOIN documents d ON documents_fts.rowid = d.rowid
    WHERE documents_fts MATCH :query
    ORDER BY rank
    LIMIT :limit
"""

INTERACTIONS_SQL = """
    SELECT
        i.id, i.document_id, i.action_type, i.selected_text, i.response,
        i.page_number, i.created_at, d.filename, rank,
        snippet(interactions_fts, 0, '<mark>', '</mark>', '...', 32) AS snippet
    FROM interactions_fts
    JOIN interactions i ON interactions_fts.rowid = i.rowid
    JOIN documents d ON i.document_id = d.id
    WHERE interactions_fts MATCH :query {document_filter}
    ORDER BY rank
    LIMIT :limit
"""

CONCEPTS_SQL = """
    SELECT c.id, c.name, c.created_at, rank
    FROM concepts_fts
    JOIN concepts c ON concepts_fts.rowid = c.rowid
    WHERE concepts_fts MATCH :query
    ORDER BY rank
    LIMIT :limit
"""


def escape_query(query: str) -> str:
    """
    Build a safe FTS5 MATCH expression from free text

    Example:
        >>> escape_query('neural (net*')
        '"neural"* "net"*'
    """
    terms = FTS_SPECIAL_CHARS.sub("", query).split()
    return " ".join(f'"{term}"*' for term in terms)


class SearchService:
    """
    Full-text search

    Failures (malformed index, missing FTS tables) are logged and reported
    as empty results.
    """

    def __init__(self, db: Session):
        self.db = db

    def _run(self, sql: str, params: Dict[str, Any], kind: str, **column_types) -> List[Dict[str, Any]]:
        escaped = escape_query(params["query"])
        if not escaped:
            return []

        statement = text(sql).columns(**column_types) if column_types else text(sql)
        try:
            result = self.db.execute(statement, {**params, "query": escaped})
            return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as e:
            logger.error(f"Search {kind} failed: {e}")
            self.db.rollback()
            return []

    def documents(self, query: str, limit: int = None) -> List[Dict[str, Any]]:
        return self._run(
            DOCUMENTS_SQL,
            {"query": query, "limit": limit or settings.SEARCH_LIMIT},
            "documents",
            last_opened_at=DateTime,
        )

    def interactions(self, query: str, limit: int = None) -> List[Dict[str, Any]]:
        return self._run(
            INTERACTIONS_SQL.format(document_filter=""),
            {"query": query, "limit": limit or settings.SEARCH_LIMIT},
            "interactions",
            created_at=DateTime,
        )

    def concepts(self, query: str, limit: int = None) -> List[Dict[str, Any]]:
        return self._run(
            CONCEPTS_SQL,
            {"query": query, "limit": limit or settings.SEARCH_LIMIT},
            "concepts",
            created_at=DateTime,
        )

    def all(self, query: str, limit_per_type: int = None) -> Dict[str, List[Dict[str, Any]]]:
        limit = limit_per_type or settings.SEARCH_LIMIT_PER_TYPE
        return {
            "documents": self.documents(query, limit),
            "interactions": self.interactions(query, limit),
            "concepts": self.concepts(query, limit),
        }

    def interactions_in_document(self, document_id: str, query: str, limit: int = None) -> List[Dict[str, Any]]:
        return self._run(
            INTERACTIONS_SQL.format(document_filter="AND i.document_id = :document_id"),
            {"query": query, "document_id": document_id, "limit": limit or settings.SEARCH_LIMIT},
            "interactions in document",
            created_at=DateTime,
        )
