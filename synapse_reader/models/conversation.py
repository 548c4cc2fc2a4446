"""
Conversation Models - persistent AI conversations and their sources
"""

from sqlalchemy import Column, String, Text, Integer, ForeignKey, DateTime, Index, CheckConstraint
from sqlalchemy.orm import relationship

from synapse_reader.database import Base
from synapse_reader.utils.clock import new_id, utcnow


class Conversation(Base):
    """
    Conversation model - a thread anchored on a document selection

    Attributes:
        id: Conversation UUID
        document_id: Document the conversation started from (cascade delete)
        highlight_id: Optional highlight anchor (set NULL when the highlight goes)
        workspace_id: Optional workspace for multi-document chat
        selected_text: Selection that started the conversation
        page_context / page_number: Where the selection came from
        title: Optional user title
        created_at / updated_at: Timestamps (updated_at bumps on every message)

    Relationships:
        messages: Conversation messages (cascade delete)
        sources: Additional documents quoted in the conversation (cascade delete)
    """

    __tablename__ = "conversations"
    __table_args__ = (
        Index("idx_conversations_doc", "document_id"),
        Index("idx_conversations_updated", "updated_at"),
        Index("idx_conversations_workspace", "workspace_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False)
    highlight_id = Column(String(36), ForeignKey("highlights.id", ondelete="SET NULL"))
    selected_text = Column(Text, nullable=False)
    page_context = Column(Text)
    page_number = Column(Integer)
    title = Column(String)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    workspace_id = Column(String(36), ForeignKey("workspaces.id"))

    document = relationship("Document", back_populates="conversations")
    messages = relationship(
        "ConversationMessage",
        back_populates="conversation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ConversationMessage.created_at",
    )
    sources = relationship(
        "ConversationSource",
        back_populates="conversation",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Conversation(id={self.id}, document_id={self.document_id})>"


class ConversationMessage(Base):
    """
    Conversation message - user or assistant turn
    """

    __tablename__ = "conversation_messages"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'assistant')", name="ck_conversation_messages_role"),
        Index("idx_conv_messages_conv", "conversation_id"),
        Index("idx_conv_messages_created", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    conversation_id = Column(String(36), ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False)
    role = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    action_type = Column(String)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    conversation = relationship("Conversation", back_populates="messages")

    def __repr__(self):
        return f"<ConversationMessage(id={self.id}, role={self.role})>"


class ConversationSource(Base):
    """
    Conversation source - a document (and optional quote) contributing to a conversation
    """

    __tablename__ = "conversation_sources"
    __table_args__ = (
        Index("idx_conversation_sources_conversation", "conversation_id"),
        Index("idx_conversation_sources_document", "document_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    conversation_id = Column(String(36), ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False)
    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False)
    quoted_text = Column(Text)
    page_number = Column(Integer)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    conversation = relationship("Conversation", back_populates="sources")
    document = relationship("Document")
