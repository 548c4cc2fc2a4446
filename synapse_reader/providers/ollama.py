"""
Ollama Provider - Local LLM via Ollama
"""

import logging
from typing import AsyncIterator, Optional

import httpx

from synapse_reader.config import settings
from synapse_reader.providers.base import AIProvider, CompletionRequest
from synapse_reader.providers.streaming import field, parse_ndjson_stream, text_of

logger = logging.getLogger(__name__)


class OllamaProvider(AIProvider):
    """Ollama local model provider (NDJSON streaming)"""

    id = "ollama"
    name = "Ollama (Local)"
    type = "local"

    def __init__(self, base_url: Optional[str] = None, model: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.base_url = (base_url or settings.OLLAMA_BASE_URL).rstrip("/")
        self.model = model or settings.OLLAMA_MODEL

    async def is_available(self) -> bool:
        """Probe /api/tags; any failure means unavailable"""
        try:
            async with httpx.AsyncClient(timeout=settings.OLLAMA_PROBE_TIMEOUT) as client:
                response = await client.get(f"{self.base_url}/api/tags")
                return response.status_code == 200
        except httpx.HTTPError as e:
            logger.debug(f"Ollama not reachable at {self.base_url}: {e}")
            return False

    async def complete(self, request: CompletionRequest) -> AsyncIterator[str]:
        if request.conversation_history:
            # Follow-ups go through the chat endpoint to keep the turns
            url = f"{self.base_url}/api/chat"
            system_prompt = self.prompt_builder.build_system_prompt()
            messages = [{"role": "system", "content": system_prompt}]
            messages += [{"role": t.role, "content": t.content} for t in request.conversation_history]
            payload = {"model": self.model, "messages": messages, "stream": True}
        else:
            url = f"{self.base_url}/api/generate"
            system_prompt, user_message = self.build_prompt(request)
            prompt = f"{system_prompt}\n\n{user_message}" if system_prompt else user_message
            payload = {"model": self.model, "prompt": prompt, "stream": True}

        async with self._open_stream(url, payload) as response:
            async for event in parse_ndjson_stream(response.aiter_lines()):
                content = text_of(event.get("response")) or text_of(field(event, "message").get("content"))
                if content:
                    yield content
