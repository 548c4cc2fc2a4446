"""
Document Service - documents opened in the reader
"""

import logging
from pathlib import Path
from typing import List, Optional

from sqlalchemy.orm import Session

from synapse_reader.config import settings
from synapse_reader.core.exceptions import NotFoundError
from synapse_reader.models.document import Document
from synapse_reader.utils.clock import utcnow

logger = logging.getLogger(__name__)


class DocumentService:
    """Open, track and re-open PDF documents"""

    def __init__(self, db: Session):
        self.db = db

    def get_or_create(self, filename: str, filepath: str, total_pages: Optional[int] = None) -> Document:
        """
        Return the document for a filepath, creating it on first open

        An existing document gets last_opened_at bumped (and total_pages
        updated when given).

        Args:
            filename: Display name
            filepath: Absolute path, unique per document
            total_pages: Page count reported by the viewer

        Returns:
            Document: Existing or new document
        """
        document = self.db.query(Document).filter(Document.filepath == filepath).first()

        if document:
            document.last_opened_at = utcnow()
            if total_pages is not None:
                document.total_pages = total_pages
        else:
            document = Document(filename=filename, filepath=filepath, total_pages=total_pages)
            self.db.add(document)
            logger.info(f"Registered document {filename}")

        self.db.commit()
        self.db.refresh(document)
        return document

    def get_by_id(self, document_id: str) -> Optional[Document]:
        return self.db.query(Document).filter(Document.id == document_id).first()

    def update(
        self,
        document_id: str,
        scroll_position: Optional[float] = None,
        total_pages: Optional[int] = None,
    ) -> Optional[Document]:
        """Update reading position and/or page count; None when not found"""
        document = self.get_by_id(document_id)
        if not document:
            return None

        if scroll_position is not None:
            document.scroll_position = scroll_position
        if total_pages is not None:
            document.total_pages = total_pages

        self.db.commit()
        self.db.refresh(document)
        return document

    def get_recent(self, limit: int = None) -> List[Document]:
        limit = limit or settings.RECENT_DOCUMENTS_LIMIT
        return (
            self.db.query(Document)
            .order_by(Document.last_opened_at.desc())
            .limit(limit)
            .all()
        )

    def get_file_path(self, document_id: str) -> Path:
        """
        Path of the stored PDF

        Raises:
            NotFoundError: Unknown document or the file is gone from disk
        """
        document = self.get_by_id(document_id)
        if not document:
            raise NotFoundError(f"Document {document_id} not found")

        path = Path(document.filepath)
        if not path.is_file():
            logger.error(f"Failed to read file: {path} does not exist")
            raise NotFoundError(f"File not found: {document.filepath}")
        return path
