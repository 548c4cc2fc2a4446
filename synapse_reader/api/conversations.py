"""
Conversation API endpoints
Persistent conversations, their messages, sources and workspace link
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from synapse_reader.api.deps import get_db
from synapse_reader.schemas.conversation import (
    ConversationCreate,
    MessageCreate,
    TitleUpdate,
    MessageResponse,
    ConversationResponse,
    ConversationWithMessages,
    ConversationSummary,
)
from synapse_reader.schemas.workspace import (
    SourceCreate,
    SourceResponse,
    SourceWithFilename,
    ConversationWorkspaceSet,
    MembershipResult,
)
from synapse_reader.services.conversation_service import ConversationService
from synapse_reader.services.workspace_service import WorkspaceService
from synapse_reader.core.exceptions import http_404_not_found

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.post("", response_model=ConversationResponse, status_code=status.HTTP_201_CREATED)
async def create_conversation(
    conversation: ConversationCreate,
    db: Session = Depends(get_db)
):
    """
    Start a conversation on a document selection

    Raises:
        IntegrityError: Unknown document or highlight (409)
    """
    return ConversationService(db).create(**conversation.model_dump())


@router.get("/recent", response_model=List[ConversationSummary])
async def recent_conversations(
    limit: int = 10,
    db: Session = Depends(get_db)
):
    """Most recently active conversations with message counts and last message"""
    return ConversationService(db).recent(limit)


@router.get("/document/{document_id}", response_model=List[ConversationSummary])
async def conversations_by_document(
    document_id: str,
    db: Session = Depends(get_db)
):
    return ConversationService(db).by_document(document_id)


@router.get("/{conversation_id}", response_model=ConversationWithMessages)
async def get_conversation(
    conversation_id: str,
    db: Session = Depends(get_db)
):
    """
    Conversation with all its messages in order

    Raises:
        HTTPException: 404 if not found
    """
    conversation = ConversationService(db).get_with_messages(conversation_id)
    if not conversation:
        raise http_404_not_found(f"Conversation {conversation_id} not found")
    return conversation


@router.get("/{conversation_id}/messages", response_model=List[MessageResponse])
async def conversation_messages(
    conversation_id: str,
    db: Session = Depends(get_db)
):
    return ConversationService(db).messages(conversation_id)


@router.post("/{conversation_id}/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_message(
    conversation_id: str,
    message: MessageCreate,
    db: Session = Depends(get_db)
):
    """
    Append a message (bumps the conversation's updated_at)

    Raises:
        NotFoundError: Unknown conversation (404)
    """
    return ConversationService(db).add_message(
        conversation_id,
        role=message.role,
        content=message.content,
        action_type=message.action_type
    )


@router.patch("/{conversation_id}/title", status_code=status.HTTP_204_NO_CONTENT)
async def update_title(
    conversation_id: str,
    update: TitleUpdate,
    db: Session = Depends(get_db)
):
    if not ConversationService(db).update_title(conversation_id, update.title):
        raise http_404_not_found(f"Conversation {conversation_id} not found")
    return None


@router.delete("/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_conversation(
    conversation_id: str,
    db: Session = Depends(get_db)
):
    """Delete a conversation with its messages and sources"""
    if not ConversationService(db).delete(conversation_id):
        raise http_404_not_found(f"Conversation {conversation_id} not found")
    return None


# Sources and workspace link

@router.get("/{conversation_id}/sources", response_model=List[SourceWithFilename])
async def list_sources(
    conversation_id: str,
    db: Session = Depends(get_db)
):
    return WorkspaceService(db).sources(conversation_id)


@router.post("/{conversation_id}/sources", response_model=SourceResponse, status_code=status.HTTP_201_CREATED)
async def add_source(
    conversation_id: str,
    source: SourceCreate,
    db: Session = Depends(get_db)
):
    return WorkspaceService(db).add_source(
        conversation_id,
        source.document_id,
        quoted_text=source.quoted_text,
        page_number=source.page_number
    )


@router.delete("/{conversation_id}/sources/document/{document_id}", response_model=MembershipResult)
async def remove_sources_by_document(
    conversation_id: str,
    document_id: str,
    db: Session = Depends(get_db)
):
    """Remove every source of one document from a conversation"""
    return {"success": WorkspaceService(db).remove_sources_by_document(conversation_id, document_id)}


@router.delete("/{conversation_id}/sources/{source_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_source(
    conversation_id: str,
    source_id: str,
    db: Session = Depends(get_db)
):
    if not WorkspaceService(db).remove_source(source_id):
        raise http_404_not_found(f"Source {source_id} not found")
    return None


@router.put("/{conversation_id}/workspace", status_code=status.HTTP_204_NO_CONTENT)
async def set_conversation_workspace(
    conversation_id: str,
    payload: ConversationWorkspaceSet,
    db: Session = Depends(get_db)
):
    """Attach a conversation to a workspace (workspace_id=null detaches it)"""
    if not WorkspaceService(db).set_conversation_workspace(conversation_id, payload.workspace_id):
        raise http_404_not_found(f"Conversation {conversation_id} not found")
    return None
