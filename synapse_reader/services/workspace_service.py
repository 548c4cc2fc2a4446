"""
Workspace Service - multi-document workspaces and conversation sources
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from synapse_reader.models.conversation import Conversation, ConversationSource
from synapse_reader.models.document import Document
from synapse_reader.models.workspace import Workspace, WorkspaceDocument
from synapse_reader.utils.clock import utcnow

logger = logging.getLogger(__name__)


class WorkspaceService:
    """
    Workspaces group documents (ordered by position) and conversations.

    Any change to a workspace's membership bumps its updated_at.
    """

    def __init__(self, db: Session):
        self.db = db

    def _touch(self, workspace_id: str) -> None:
        self.db.query(Workspace).filter(Workspace.id == workspace_id).update({"updated_at": utcnow()})

    # ------------------------------------------------------------------
    # Workspaces
    # ------------------------------------------------------------------

    def create(self, name: str, description: Optional[str] = None) -> Workspace:
        now = utcnow()
        workspace = Workspace(name=name, description=description or None, created_at=now, updated_at=now)
        self.db.add(workspace)
        self.db.commit()
        self.db.refresh(workspace)
        return workspace

    def list(self) -> List[Dict[str, Any]]:
        """All workspaces with their document_count, most recently updated first"""
        rows = (
            self.db.query(Workspace, func.count(WorkspaceDocument.document_id).label("document_count"))
            .outerjoin(WorkspaceDocument, WorkspaceDocument.workspace_id == Workspace.id)
            .group_by(Workspace.id)
            .order_by(Workspace.updated_at.desc())
            .all()
        )
        return [
            {
                "id": workspace.id,
                "name": workspace.name,
                "description": workspace.description,
                "created_at": workspace.created_at,
                "updated_at": workspace.updated_at,
                "document_count": count,
            }
            for workspace, count in rows
        ]

    def get(self, workspace_id: str) -> Optional[Workspace]:
        return self.db.query(Workspace).filter(Workspace.id == workspace_id).first()

    def update(
        self,
        workspace_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Optional[Workspace]:
        workspace = self.get(workspace_id)
        if not workspace:
            return None

        if name is not None:
            workspace.name = name
        if description is not None:
            workspace.description = description
        workspace.updated_at = utcnow()

        self.db.commit()
        self.db.refresh(workspace)
        return workspace

    def delete(self, workspace_id: str) -> bool:
        """
        Delete a workspace

        Document links are removed by cascade; conversations stay and are
        detached from the workspace.
        """
        self.db.query(Conversation).filter(Conversation.workspace_id == workspace_id).update(
            {"workspace_id": None}
        )
        deleted = self.db.query(Workspace).filter(Workspace.id == workspace_id).delete()
        self.db.commit()
        return deleted > 0

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def add_document(self, workspace_id: str, document_id: str) -> bool:
        """
        Append a document at the next position

        Returns:
            False when the document is already in the workspace
        """
        if self.is_document_in_workspace(workspace_id, document_id):
            logger.debug(f"Document {document_id} already in workspace {workspace_id}")
            return False

        max_position = (
            self.db.query(func.max(WorkspaceDocument.position))
            .filter(WorkspaceDocument.workspace_id == workspace_id)
            .scalar()
        )
        position = -1 if max_position is None else max_position

        self.db.add(WorkspaceDocument(
            workspace_id=workspace_id,
            document_id=document_id,
            position=position + 1,
        ))
        self._touch(workspace_id)
        self.db.commit()
        return True

    def remove_document(self, workspace_id: str, document_id: str) -> bool:
        deleted = (
            self.db.query(WorkspaceDocument)
            .filter(WorkspaceDocument.workspace_id == workspace_id, WorkspaceDocument.document_id == document_id)
            .delete()
        )
        if deleted:
            self._touch(workspace_id)
        self.db.commit()
        return deleted > 0

    def reorder_document(self, workspace_id: str, document_id: str, position: int) -> bool:
        updated = (
            self.db.query(WorkspaceDocument)
            .filter(WorkspaceDocument.workspace_id == workspace_id, WorkspaceDocument.document_id == document_id)
            .update({"position": position})
        )
        if updated:
            self._touch(workspace_id)
        self.db.commit()
        return updated > 0

    def documents(self, workspace_id: str) -> List[Document]:
        return (
            self.db.query(Document)
            .join(WorkspaceDocument, WorkspaceDocument.document_id == Document.id)
            .filter(WorkspaceDocument.workspace_id == workspace_id)
            .order_by(WorkspaceDocument.position.asc())
            .all()
        )

    def for_document(self, document_id: str) -> List[Workspace]:
        return (
            self.db.query(Workspace)
            .join(WorkspaceDocument, WorkspaceDocument.workspace_id == Workspace.id)
            .filter(WorkspaceDocument.document_id == document_id)
            .order_by(Workspace.updated_at.desc())
            .all()
        )

    def is_document_in_workspace(self, workspace_id: str, document_id: str) -> bool:
        return self.db.get(WorkspaceDocument, (workspace_id, document_id)) is not None

    # ------------------------------------------------------------------
    # Conversations and their sources
    # ------------------------------------------------------------------

    def add_source(
        self,
        conversation_id: str,
        document_id: str,
        quoted_text: Optional[str] = None,
        page_number: Optional[int] = None,
    ) -> ConversationSource:
        source = ConversationSource(
            conversation_id=conversation_id,
            document_id=document_id,
            quoted_text=quoted_text or None,
            page_number=page_number,
        )
        self.db.add(source)
        self.db.commit()
        self.db.refresh(source)
        return source

    def remove_source(self, source_id: str) -> bool:
        deleted = self.db.query(ConversationSource).filter(ConversationSource.id == source_id).delete()
        self.db.commit()
        return deleted > 0

    def remove_sources_by_document(self, conversation_id: str, document_id: str) -> bool:
        deleted = (
            self.db.query(ConversationSource)
            .filter(
                ConversationSource.conversation_id == conversation_id,
                ConversationSource.document_id == document_id,
            )
            .delete()
        )
        self.db.commit()
        return deleted > 0

    def sources(self, conversation_id: str) -> List[Dict[str, Any]]:
        """Sources of a conversation with the document filename, oldest first"""
        rows = (
            self.db.query(ConversationSource, Document.filename)
            .join(Document, ConversationSource.document_id == Document.id)
            .filter(ConversationSource.conversation_id == conversation_id)
            .order_by(ConversationSource.created_at.asc())
            .all()
        )
        return [
            {
                "id": source.id,
                "conversation_id": source.conversation_id,
                "document_id": source.document_id,
                "quoted_text": source.quoted_text,
                "page_number": source.page_number,
                "created_at": source.created_at,
                "filename": filename,
            }
            for source, filename in rows
        ]

    def set_conversation_workspace(self, conversation_id: str, workspace_id: Optional[str]) -> bool:
        updated = (
            self.db.query(Conversation)
            .filter(Conversation.id == conversation_id)
            .update({"workspace_id": workspace_id})
        )
        self.db.commit()
        return updated > 0

    def conversations(self, workspace_id: str) -> List[Conversation]:
        return (
            self.db.query(Conversation)
            .filter(Conversation.workspace_id == workspace_id)
            .order_by(Conversation.updated_at.desc())
            .all()
        )
