"""
Workspace Models - named groups of documents for multi-document work
"""

from sqlalchemy import Column, String, Text, Integer, ForeignKey, DateTime, Index

from synapse_reader.database import Base
from synapse_reader.utils.clock import new_id, utcnow


class Workspace(Base):
    """
    Workspace model

    Attributes:
        id: Workspace UUID
        name: Display name (not unique)
        description: Optional description
        created_at / updated_at: Timestamps (updated_at bumps on membership changes)
    """

    __tablename__ = "workspaces"
    __table_args__ = (
        Index("idx_workspaces_updated", "updated_at"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Workspace(id={self.id}, name={self.name})>"


class WorkspaceDocument(Base):
    """Junction: documents in a workspace, ordered by position"""

    __tablename__ = "workspace_documents"
    __table_args__ = (
        Index("idx_workspace_documents_workspace", "workspace_id"),
        Index("idx_workspace_documents_document", "document_id"),
    )

    workspace_id = Column(String(36), ForeignKey("workspaces.id", ondelete="CASCADE"), primary_key=True)
    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, default=0)
    added_at = Column(DateTime, nullable=False, default=utcnow)
