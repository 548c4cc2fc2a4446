"""
Anthropic Provider - Messages API with SSE streaming
"""

from typing import AsyncIterator, Dict, List, Optional, Tuple

from synapse_reader.config import settings
from synapse_reader.core.exceptions import ProviderUnavailableError
from synapse_reader.providers.base import AIProvider, CompletionRequest
from synapse_reader.providers.streaming import field, parse_sse_stream, text_of


class AnthropicProvider(AIProvider):
    """Anthropic (Claude) cloud provider"""

    id = "anthropic"
    name = "Claude"
    type = "cloud"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key or ""
        self.model = model or settings.ANTHROPIC_MODEL

    async def is_available(self) -> bool:
        return bool(self.api_key)

    def build_messages(self, request: CompletionRequest) -> Tuple[Optional[str], List[Dict[str, str]]]:
        """System prompt travels outside the message list in this API"""
        if request.conversation_history:
            turns = [{"role": t.role, "content": t.content} for t in request.conversation_history]
            return self.prompt_builder.build_system_prompt(), turns

        system_prompt, user_message = self.build_prompt(request)
        return system_prompt, [{"role": "user", "content": user_message}]

    async def complete(self, request: CompletionRequest) -> AsyncIterator[str]:
        if not self.api_key:
            raise ProviderUnavailableError("Anthropic API key not configured", provider_id=self.id)

        system_prompt, messages = self.build_messages(request)
        payload = {
            "model": self.model,
            "max_tokens": settings.LLM_MAX_TOKENS,
            "messages": messages,
            "stream": True,
        }
        if system_prompt:
            payload["system"] = system_prompt

        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": settings.ANTHROPIC_VERSION,
        }

        async with self._open_stream(settings.ANTHROPIC_API_URL, payload, headers=headers) as response:
            async for event in parse_sse_stream(response.aiter_lines()):
                if event.get("type") != "content_block_delta":
                    continue
                content = text_of(field(event, "delta").get("text"))
                if content:
                    yield content
