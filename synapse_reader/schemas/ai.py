"""
Pydantic Schemas for AI queries, providers and key management
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

ActionType = Literal[
    "explain", "summarize", "define", "explain_fundamental", "extract_terms", "parse_equation"
]


class HistoryMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class AIQueryRequest(BaseModel):
    """
    Streaming AI query

    Attributes:
        text: Selected text
        context: Surrounding page text
        provider_id: Provider to use (default: current provider)
        action: Prompt template to use
        conversation_history: Earlier turns of a follow-up conversation
        document_id: When set, the completed answer is saved as an interaction
        conversation_id: When set, the conversation's sources are added as context
        page_number / scroll_position: Recorded on the saved interaction
    """
    text: str = Field(..., min_length=1)
    context: Optional[str] = None
    provider_id: Optional[str] = None
    action: ActionType = "explain"
    conversation_history: List[HistoryMessage] = Field(default_factory=list)
    document_id: Optional[str] = None
    conversation_id: Optional[str] = None
    page_number: Optional[int] = None
    scroll_position: Optional[float] = None


class StreamEvent(BaseModel):
    """
    One Server-Sent Event of an AI stream

    Types:
    - channel: Channel id of the stream (sent first, used for cancellation)
    - chunk: Buffered response text
    - done: Stream completed (interaction_id set when the answer was saved)
    - error: Provider failure
    """
    type: Literal["channel", "chunk", "done", "error"]
    channel_id: Optional[str] = None
    data: Optional[str] = None
    error: Optional[str] = None
    interaction_id: Optional[str] = None


class CancelResponse(BaseModel):
    cancelled: bool


class ProviderInfo(BaseModel):
    id: str
    name: str
    type: Literal["local", "cloud"]


class ProviderStatus(ProviderInfo):
    available: bool


class ProviderSelect(BaseModel):
    provider_id: str


class ProviderSelectResponse(BaseModel):
    success: bool


class ApiKeySet(BaseModel):
    api_key: str = Field(..., min_length=1)


class KeyStatus(BaseModel):
    provider_id: str
    has_key: bool


class TermCheck(BaseModel):
    text: str


class TermDetection(BaseModel):
    is_technical: bool
    confidence: float
    reason: str


class DeepDiveCheck(BaseModel):
    show_deep_dive: bool


class ContentType(BaseModel):
    content_type: Literal["equation", "code", "term", "general"]


class EquationMatch(BaseModel):
    latex: str
    display_mode: bool
    start: int
    end: int


class CodeBlockMatch(BaseModel):
    code: str
    language: Optional[str] = None
    start: int
    end: int


class TermMatch(BaseModel):
    term: str
    start: int
    end: int
    confidence: float


class ContentDetectionResponse(BaseModel):
    equations: List[EquationMatch]
    code_blocks: List[CodeBlockMatch]
    technical_terms: List[TermMatch]
