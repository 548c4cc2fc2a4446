"""
Pydantic Schemas for Highlight and Bookmark endpoints
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

HighlightColor = Literal["yellow", "green", "blue", "pink", "purple"]


class HighlightCreate(BaseModel):
    document_id: str
    page_number: int = Field(..., ge=1)
    start_offset: int = Field(..., ge=0)
    end_offset: int = Field(..., ge=0)
    selected_text: str = Field(..., min_length=1)
    color: HighlightColor = "yellow"
    note: Optional[str] = None


class HighlightUpdate(BaseModel):
    """Empty note clears it"""
    color: Optional[HighlightColor] = None
    note: Optional[str] = None


class HighlightResponse(BaseModel):
    id: str
    document_id: str
    page_number: int
    start_offset: int
    end_offset: int
    selected_text: str
    color: str
    note: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookmarkToggle(BaseModel):
    document_id: str
    page_number: int = Field(..., ge=1)
    label: Optional[str] = None


class BookmarkLabelUpdate(BaseModel):
    label: Optional[str] = None


class BookmarkResponse(BaseModel):
    id: str
    document_id: str
    page_number: int
    label: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookmarkToggleResponse(BaseModel):
    """bookmark is null when the toggle removed it"""
    bookmarked: bool
    bookmark: Optional[BookmarkResponse] = None


class PageBookmarked(BaseModel):
    bookmarked: bool
