"""
AI Service - streaming queries with buffering and cancellation

A query resolves its provider up front (so unknown or unavailable providers
fail before any stream starts), registers a channel, then streams events:

    channel -> chunk* -> done | error

Chunks are coalesced and flushed once the buffer reaches STREAM_BUFFER_SIZE
characters or STREAM_BUFFER_INTERVAL_MS has passed since the last flush.
A cancelled stream stops silently (no done event).
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Dict, List, Optional

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from synapse_reader.config import settings
from synapse_reader.core.exceptions import (
    ProviderError,
    ProviderNotFoundError,
    ProviderUnavailableError,
)
from synapse_reader.models.interaction import INTERACTION_ACTIONS
from synapse_reader.providers.base import AIProvider, CompletionRequest, ConversationTurn
from synapse_reader.providers.manager import ProviderManager
from synapse_reader.schemas.ai import AIQueryRequest, StreamEvent
from synapse_reader.services.interaction_service import InteractionService
from synapse_reader.services.workspace_service import WorkspaceService
from synapse_reader.utils.clock import new_id

logger = logging.getLogger(__name__)

CHANNEL_PREFIX = "ai:stream:"


class StreamRegistry:
    """Active stream channels and their cancellation flags"""

    def __init__(self):
        self._active: Dict[str, asyncio.Event] = {}

    def open(self) -> str:
        channel_id = f"{CHANNEL_PREFIX}{new_id()}"
        self._active[channel_id] = asyncio.Event()
        return channel_id

    def cancelled(self, channel_id: str) -> bool:
        event = self._active.get(channel_id)
        return event is None or event.is_set()

    def cancel(self, channel_id: str) -> bool:
        """Flag a stream as cancelled; False when no such stream is active"""
        event = self._active.pop(channel_id, None)
        if event is None:
            return False
        event.set()
        logger.info(f"Cancelled stream {channel_id}")
        return True

    def close(self, channel_id: str) -> None:
        self._active.pop(channel_id, None)

    def is_active(self, channel_id: str) -> bool:
        return channel_id in self._active

    def __len__(self) -> int:
        return len(self._active)


@dataclass
class PreparedQuery:
    channel_id: str
    provider: AIProvider
    request: CompletionRequest
    query: AIQueryRequest


class AIService:
    """
    Runs AI queries against the provider manager

    Args:
        manager: Provider registry
        registry: Active stream registry (shared so cancel can reach streams)
        session_factory: Opens a database session; needed for saving
            interactions and reading conversation sources, since a stream
            outlives the request's own session
        buffer_size: Flush threshold in characters
        buffer_interval_ms: Flush threshold in milliseconds
    """

    def __init__(
        self,
        manager: ProviderManager,
        registry: StreamRegistry,
        session_factory: Optional[Callable[[], Session]] = None,
        buffer_size: Optional[int] = None,
        buffer_interval_ms: Optional[int] = None,
    ):
        self.manager = manager
        self.registry = registry
        self.session_factory = session_factory
        self.buffer_size = settings.STREAM_BUFFER_SIZE if buffer_size is None else buffer_size
        if buffer_interval_ms is None:
            buffer_interval_ms = settings.STREAM_BUFFER_INTERVAL_MS
        self.buffer_interval = buffer_interval_ms / 1000

    async def prepare(self, query: AIQueryRequest) -> PreparedQuery:
        """
        Resolve the provider and register a channel

        Raises:
            ProviderNotFoundError: Unknown provider id
            ProviderUnavailableError: Provider not configured or not reachable
        """
        provider_id = query.provider_id or self.manager.current_provider_id
        provider = self.manager.get(provider_id)
        if provider is None:
            raise ProviderNotFoundError(f"Provider {provider_id} not found", provider_id=provider_id)

        if not await provider.is_available():
            raise ProviderUnavailableError(f"Provider {provider.name} is not available", provider_id=provider_id)

        request = CompletionRequest(
            text=query.text,
            context=self._build_context(query),
            action=query.action,
            conversation_history=[
                ConversationTurn(role=m.role, content=m.content) for m in query.conversation_history
            ],
        )
        return PreparedQuery(
            channel_id=self.registry.open(),
            provider=provider,
            request=request,
            query=query,
        )

    def _build_context(self, query: AIQueryRequest) -> Optional[str]:
        """Page context plus quotes from the conversation's source documents"""
        if not query.conversation_id or self.session_factory is None:
            return query.context

        db = self.session_factory()
        try:
            sources = WorkspaceService(db).sources(query.conversation_id)
        finally:
            db.close()

        if not sources:
            return query.context

        parts = [query.context] if query.context else []
        for source in sources:
            header = f"[Source: {source['filename']}"
            if source["page_number"] is not None:
                header += f", page {source['page_number']}"
            header += "]"
            parts.append(f"{header}\n{source['quoted_text']}" if source["quoted_text"] else header)
        return "\n\n".join(parts)

    async def stream(self, prepared: PreparedQuery) -> AsyncIterator[StreamEvent]:
        """
        Stream events for a prepared query

        Yields:
            StreamEvent: channel, then chunks, then done or error
        """
        channel_id = prepared.channel_id
        yield StreamEvent(type="channel", channel_id=channel_id)

        buffer = ""
        parts: List[str] = []
        last_flush = time.monotonic()

        try:
            async for chunk in prepared.provider.complete(prepared.request):
                if self.registry.cancelled(channel_id):
                    break

                buffer += chunk
                parts.append(chunk)

                if len(buffer) >= self.buffer_size or time.monotonic() - last_flush >= self.buffer_interval:
                    yield StreamEvent(type="chunk", channel_id=channel_id, data=buffer)
                    buffer = ""
                    last_flush = time.monotonic()

            if buffer:
                yield StreamEvent(type="chunk", channel_id=channel_id, data=buffer)

            if self.registry.cancelled(channel_id):
                return

            try:
                interaction_id = self._save_interaction(prepared, "".join(parts))
            except SQLAlchemyError as e:
                logger.error(f"Could not save interaction for {channel_id}: {e}")
                yield StreamEvent(type="error", channel_id=channel_id, error="Response could not be saved")
                return
            yield StreamEvent(type="done", channel_id=channel_id, interaction_id=interaction_id)

        except (ProviderError, httpx.HTTPError) as e:
            if not self.registry.cancelled(channel_id):
                logger.error(f"Stream {channel_id} failed: {e}")
                yield StreamEvent(type="error", channel_id=channel_id, error=str(e))
        finally:
            self.registry.close(channel_id)

    def _save_interaction(self, prepared: PreparedQuery, response: str) -> Optional[str]:
        query = prepared.query
        if not query.document_id or self.session_factory is None:
            return None
        if query.action not in INTERACTION_ACTIONS or not response:
            return None

        db = self.session_factory()
        try:
            interaction = InteractionService(db).save(
                document_id=query.document_id,
                action_type=query.action,
                selected_text=query.text,
                response=response,
                page_context=query.context,
                page_number=query.page_number,
                scroll_position=query.scroll_position,
            )
            return interaction.id
        finally:
            db.close()

    async def run(self, query: AIQueryRequest) -> AsyncIterator[StreamEvent]:
        """prepare() and stream() in one call"""
        prepared = await self.prepare(query)
        async for event in self.stream(prepared):
            yield event

    def cancel(self, channel_id: str) -> bool:
        return self.registry.cancel(channel_id)
