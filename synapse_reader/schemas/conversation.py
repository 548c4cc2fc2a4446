"""
Pydantic Schemas for Conversation endpoints
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ConversationCreate(BaseModel):
    document_id: str
    selected_text: str = Field(..., min_length=1)
    highlight_id: Optional[str] = None
    page_context: Optional[str] = None
    page_number: Optional[int] = None
    title: Optional[str] = None


class MessageCreate(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    action_type: Optional[str] = None


class TitleUpdate(BaseModel):
    title: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    id: str
    conversation_id: str
    role: str
    content: str
    action_type: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ConversationResponse(BaseModel):
    id: str
    document_id: str
    highlight_id: Optional[str] = None
    workspace_id: Optional[str] = None
    selected_text: str
    page_context: Optional[str] = None
    page_number: Optional[int] = None
    title: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ConversationWithMessages(ConversationResponse):
    messages: List[MessageResponse] = Field(default_factory=list)


class ConversationSummary(BaseModel):
    id: str
    document_id: str
    selected_text: str
    title: Optional[str] = None
    message_count: int
    last_message_preview: Optional[str] = None
    created_at: datetime
    updated_at: datetime
