"""
AI API endpoints
Streaming queries (Server-Sent Events) and cancellation
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from synapse_reader.api.deps import get_ai_service
from synapse_reader.schemas.ai import AIQueryRequest, CancelResponse
from synapse_reader.services.ai_service import AIService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/query")
async def query(
    request: AIQueryRequest,
    ai_service: AIService = Depends(get_ai_service)
):
    """
    Stream an AI answer for a selection

    The provider is resolved before the stream starts, so an unknown
    provider answers 404 and an unavailable one 503. The stream then sends
    `data: {json}` events: channel (with the id to cancel), chunk*, and
    finally done or error.

    Args:
        request: Query (text, context, provider_id, action, conversation_history,
            document_id, conversation_id)
        ai_service: AI service

    Returns:
        StreamingResponse: text/event-stream of StreamEvent
    """
    prepared = await ai_service.prepare(request)
    logger.info(f"Streaming {request.action} from {prepared.provider.id} on {prepared.channel_id}")

    async def event_stream():
        """Generate SSE events from StreamEvent objects"""
        async for event in ai_service.stream(prepared):
            yield f"data: {event.model_dump_json(exclude_none=True)}\n\n"

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no"
        }
    )


@router.post("/cancel/{channel_id}", response_model=CancelResponse)
async def cancel(
    channel_id: str,
    ai_service: AIService = Depends(get_ai_service)
):
    """Cancel an active stream; cancelled=False when it already finished"""
    return {"cancelled": ai_service.cancel(channel_id)}
