"""
Pydantic Schemas for Workspace endpoints
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WorkspaceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class WorkspaceUpdate(BaseModel):
    """All fields optional"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class WorkspaceResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WorkspaceWithCount(WorkspaceResponse):
    document_count: int = 0


class WorkspaceDocumentAdd(BaseModel):
    document_id: str


class WorkspaceDocumentReorder(BaseModel):
    position: int = Field(..., ge=0)


class MembershipResult(BaseModel):
    """Outcome of a membership change (False: nothing changed)"""
    success: bool


class SourceCreate(BaseModel):
    document_id: str
    quoted_text: Optional[str] = None
    page_number: Optional[int] = None


class SourceResponse(BaseModel):
    id: str
    conversation_id: str
    document_id: str
    quoted_text: Optional[str] = None
    page_number: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SourceWithFilename(SourceResponse):
    filename: str


class ConversationWorkspaceSet(BaseModel):
    workspace_id: Optional[str] = None


class WorkspaceConversation(BaseModel):
    id: str
    selected_text: str
    title: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
