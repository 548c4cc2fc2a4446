"""
Gemini Provider - streamGenerateContent with SSE (alt=sse)
"""

from typing import AsyncIterator, Dict, List, Optional

from synapse_reader.config import settings
from synapse_reader.core.exceptions import ProviderUnavailableError
from synapse_reader.providers.base import AIProvider, CompletionRequest
from synapse_reader.providers.streaming import first, field, parse_sse_stream, text_of


class GeminiProvider(AIProvider):
    """Google Gemini cloud provider"""

    id = "gemini"
    name = "Gemini"
    type = "cloud"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key or ""
        self.model = model or settings.GEMINI_MODEL

    async def is_available(self) -> bool:
        return bool(self.api_key)

    @property
    def url(self) -> str:
        return f"{settings.GEMINI_API_URL.rstrip('/')}/{self.model}:streamGenerateContent"

    def build_contents(self, request: CompletionRequest) -> List[Dict]:
        if request.conversation_history:
            # Gemini calls the assistant "model"
            return [
                {
                    "role": "model" if turn.role == "assistant" else "user",
                    "parts": [{"text": turn.content}],
                }
                for turn in request.conversation_history
            ]

        system_prompt, user_message = self.build_prompt(request)
        prompt = f"{system_prompt}\n\n{user_message}" if system_prompt else user_message
        return [{"role": "user", "parts": [{"text": prompt}]}]

    async def complete(self, request: CompletionRequest) -> AsyncIterator[str]:
        if not self.api_key:
            raise ProviderUnavailableError("Gemini API key not configured", provider_id=self.id)

        payload = {
            "contents": self.build_contents(request),
            "generationConfig": {
                "temperature": settings.LLM_TEMPERATURE,
                "maxOutputTokens": settings.LLM_MAX_TOKENS,
            },
        }
        params = {"key": self.api_key, "alt": "sse"}

        async with self._open_stream(self.url, payload, params=params) as response:
            async for event in parse_sse_stream(response.aiter_lines()):
                content = text_of(first(field(first(event, "candidates"), "content"), "parts").get("text"))
                if content:
                    yield content
