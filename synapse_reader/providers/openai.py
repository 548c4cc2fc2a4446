"""
OpenAI Provider - Chat Completions API with SSE streaming
"""

from typing import AsyncIterator, Dict, List, Optional

from synapse_reader.config import settings
from synapse_reader.core.exceptions import ProviderUnavailableError
from synapse_reader.providers.base import AIProvider, CompletionRequest
from synapse_reader.providers.streaming import first, field, parse_sse_stream, text_of


class OpenAIProvider(AIProvider):
    """OpenAI cloud provider"""

    id = "openai"
    name = "OpenAI"
    type = "cloud"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key or ""
        self.model = model or settings.OPENAI_MODEL

    async def is_available(self) -> bool:
        return bool(self.api_key)

    def build_messages(self, request: CompletionRequest) -> List[Dict[str, str]]:
        if request.conversation_history:
            system_prompt = self.prompt_builder.build_system_prompt()
            turns = [{"role": t.role, "content": t.content} for t in request.conversation_history]
            return [{"role": "system", "content": system_prompt}] + turns

        system_prompt, user_message = self.build_prompt(request)
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_message})
        return messages

    async def complete(self, request: CompletionRequest) -> AsyncIterator[str]:
        if not self.api_key:
            raise ProviderUnavailableError("OpenAI API key not configured", provider_id=self.id)

        payload = {
            "model": self.model,
            "messages": self.build_messages(request),
            "stream": True,
            "max_tokens": settings.LLM_MAX_TOKENS,
            "temperature": settings.LLM_TEMPERATURE,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        async with self._open_stream(settings.OPENAI_API_URL, payload, headers=headers) as response:
            async for event in parse_sse_stream(response.aiter_lines()):
                content = text_of(field(first(event, "choices"), "delta").get("content"))
                if content:
                    yield content
