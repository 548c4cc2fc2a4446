"""
Conversation Service - persistent AI conversations anchored on a selection
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func, literal_column, select
from sqlalchemy.orm import Session

from synapse_reader.config import settings
from synapse_reader.core.exceptions import NotFoundError
from synapse_reader.models.conversation import Conversation, ConversationMessage
from synapse_reader.utils.clock import utcnow

# Messages created within the same clock tick keep insertion order
MESSAGE_ROWID = literal_column("conversation_messages.rowid")


class ConversationService:
    """Create conversations, append messages and list summaries"""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        document_id: str,
        selected_text: str,
        highlight_id: Optional[str] = None,
        page_context: Optional[str] = None,
        page_number: Optional[int] = None,
        title: Optional[str] = None,
    ) -> Conversation:
        now = utcnow()
        conversation = Conversation(
            document_id=document_id,
            selected_text=selected_text,
            highlight_id=highlight_id or None,
            page_context=page_context or None,
            page_number=page_number,
            title=title or None,
            created_at=now,
            updated_at=now,
        )
        self.db.add(conversation)
        self.db.commit()
        self.db.refresh(conversation)
        return conversation

    def get_by_id(self, conversation_id: str) -> Optional[Conversation]:
        return self.db.query(Conversation).filter(Conversation.id == conversation_id).first()

    def add_message(
        self,
        conversation_id: str,
        role: str,
        content: str,
        action_type: Optional[str] = None,
    ) -> ConversationMessage:
        """
        Append a message and bump the conversation's updated_at

        Raises:
            NotFoundError: Unknown conversation
        """
        conversation = self.get_by_id(conversation_id)
        if not conversation:
            raise NotFoundError(f"Conversation {conversation_id} not found")

        now = utcnow()
        message = ConversationMessage(
            conversation_id=conversation_id,
            role=role,
            content=content,
            action_type=action_type or None,
            created_at=now,
        )
        self.db.add(message)
        conversation.updated_at = now

        self.db.commit()
        self.db.refresh(message)
        return message

    def update_title(self, conversation_id: str, title: str) -> bool:
        updated = (
            self.db.query(Conversation)
            .filter(Conversation.id == conversation_id)
            .update({"title": title, "updated_at": utcnow()})
        )
        self.db.commit()
        return updated > 0

    def delete(self, conversation_id: str) -> bool:
        """Delete a conversation; messages and sources go with it"""
        conversation = self.get_by_id(conversation_id)
        if not conversation:
            return False
        self.db.delete(conversation)
        self.db.commit()
        return True

    def messages(self, conversation_id: str) -> List[ConversationMessage]:
        return (
            self.db.query(ConversationMessage)
            .filter(ConversationMessage.conversation_id == conversation_id)
            .order_by(ConversationMessage.created_at.asc(), MESSAGE_ROWID.asc())
            .all()
        )

    def get_with_messages(self, conversation_id: str) -> Optional[Dict[str, Any]]:
        conversation = self.get_by_id(conversation_id)
        if not conversation:
            return None
        return {
            "id": conversation.id,
            "document_id": conversation.document_id,
            "highlight_id": conversation.highlight_id,
            "workspace_id": conversation.workspace_id,
            "selected_text": conversation.selected_text,
            "page_context": conversation.page_context,
            "page_number": conversation.page_number,
            "title": conversation.title,
            "created_at": conversation.created_at,
            "updated_at": conversation.updated_at,
            "messages": self.messages(conversation_id),
        }

    def _summaries(self, document_id: Optional[str] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        message_count = (
            select(func.count(ConversationMessage.id))
            .where(ConversationMessage.conversation_id == Conversation.id)
            .correlate(Conversation)
            .scalar_subquery()
        )
        last_message = (
            select(ConversationMessage.content)
            .where(ConversationMessage.conversation_id == Conversation.id)
            .order_by(ConversationMessage.created_at.desc(), MESSAGE_ROWID.desc())
            .limit(1)
            .correlate(Conversation)
            .scalar_subquery()
        )

        query = self.db.query(
            Conversation,
            message_count.label("message_count"),
            last_message.label("last_message_preview"),
        )
        if document_id is not None:
            query = query.filter(Conversation.document_id == document_id)
        query = query.order_by(Conversation.updated_at.desc())
        if limit is not None:
            query = query.limit(limit)

        return [
            {
                "id": conversation.id,
                "document_id": conversation.document_id,
                "selected_text": conversation.selected_text,
                "title": conversation.title,
                "created_at": conversation.created_at,
                "updated_at": conversation.updated_at,
                "message_count": count,
                "last_message_preview": preview,
            }
            for conversation, count, preview in query.all()
        ]

    def by_document(self, document_id: str) -> List[Dict[str, Any]]:
        """Summaries of a document's conversations, most recently active first"""
        return self._summaries(document_id=document_id)

    def recent(self, limit: int = None) -> List[Dict[str, Any]]:
        return self._summaries(limit=limit or settings.RECENT_CONVERSATIONS_LIMIT)
