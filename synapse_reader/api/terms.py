"""
Term and content detection API endpoints
"""

from fastapi import APIRouter

from synapse_reader.schemas.ai import (
    TermCheck,
    TermDetection,
    DeepDiveCheck,
    ContentType,
    ContentDetectionResponse,
)
from synapse_reader.services.content_detector import detect_content, selection_content_type
from synapse_reader.services.term_detector import detect_technical_term, should_show_deep_dive

router = APIRouter(prefix="/terms", tags=["terms"])


@router.post("/detect", response_model=TermDetection)
async def detect_term(payload: TermCheck):
    """Heuristic check whether a selection is a technical term"""
    result = detect_technical_term(payload.text)
    return TermDetection(is_technical=result.is_technical, confidence=result.confidence, reason=result.reason)


@router.post("/deep-dive", response_model=DeepDiveCheck)
async def deep_dive(payload: TermCheck):
    """Whether the reader should offer a deep-dive explanation for a selection"""
    return {"show_deep_dive": should_show_deep_dive(payload.text)}


@router.post("/content-type", response_model=ContentType)
async def content_type(payload: TermCheck):
    """Equation, code, term or general: picks the tool offered for a selection"""
    return {"content_type": selection_content_type(payload.text)}


@router.post("/content", response_model=ContentDetectionResponse)
async def content(payload: TermCheck):
    """Equations, code blocks and technical terms found in a passage"""
    return detect_content(payload.text)
