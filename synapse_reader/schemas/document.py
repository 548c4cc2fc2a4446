"""
Pydantic Schemas for Document and Interaction endpoints
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class DocumentOpen(BaseModel):
    """Schema for opening (get-or-create) a document"""
    filename: str = Field(..., min_length=1, description="Display name")
    filepath: str = Field(..., min_length=1, description="Absolute path of the PDF")
    total_pages: Optional[int] = Field(None, ge=0)


class DocumentUpdate(BaseModel):
    """Schema for updating reading state (all fields optional)"""
    scroll_position: Optional[float] = None
    total_pages: Optional[int] = Field(None, ge=0)


class DocumentResponse(BaseModel):
    id: str
    filename: str
    filepath: str
    last_opened_at: datetime
    scroll_position: Optional[float] = 0
    total_pages: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InteractionCreate(BaseModel):
    """Schema for saving an interaction"""
    document_id: str
    action_type: Literal["explain", "summarize", "define"]
    selected_text: str = Field(..., min_length=1)
    response: str
    page_context: Optional[str] = None
    page_number: Optional[int] = None
    scroll_position: Optional[float] = None


class InteractionResponse(BaseModel):
    id: str
    document_id: str
    action_type: str
    selected_text: str
    page_context: Optional[str] = None
    response: str
    page_number: Optional[int] = None
    scroll_position: Optional[float] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InteractionWithFilename(InteractionResponse):
    filename: str


class ActivityDay(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD (UTC)")
    count: int
    explain_count: int = 0
    summarize_count: int = 0
    define_count: int = 0


class DocumentStats(BaseModel):
    document_id: str
    filename: str
    interaction_count: int
    last_interaction: Optional[datetime] = None
