"""
Abstract base class for AI providers
Defines the uniform streaming-completion interface over every LLM backend
"""

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict, List, Literal, Optional

import httpx

from synapse_reader.config import settings
from synapse_reader.core.exceptions import ProviderError, ProviderRateLimitError
from synapse_reader.prompts import PromptBuilder
from synapse_reader.utils.retry import retry_on_provider_error

logger = logging.getLogger(__name__)

ActionType = Literal[
    "explain", "summarize", "define", "explain_fundamental", "extract_terms", "parse_equation"
]
ProviderType = Literal["local", "cloud"]


@dataclass
class ConversationTurn:
    role: Literal["user", "assistant"]
    content: str


@dataclass
class CompletionRequest:
    """
    One completion request

    Attributes:
        text: Selected text (or a ready-made prompt for internal calls)
        context: Surrounding page text
        action: Reader action that picks the prompt template
        conversation_history: Earlier turns; when present they are sent as-is
            instead of the action prompt
        raw_prompt: Send `text` verbatim without any template or persona
    """
    text: str
    context: Optional[str] = None
    action: ActionType = "explain"
    conversation_history: List[ConversationTurn] = field(default_factory=list)
    raw_prompt: bool = False


class AIProvider(ABC):
    """Abstract base class for LLM providers"""

    id: str = ""
    name: str = ""
    type: ProviderType = "cloud"

    def __init__(self, prompt_builder: Optional[PromptBuilder] = None, timeout: Optional[float] = None):
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.timeout = timeout or settings.LLM_TIMEOUT

    @abstractmethod
    async def is_available(self) -> bool:
        """
        Whether the provider can serve requests right now

        Returns:
            bool: True when configured (cloud) or reachable (local)
        """
        pass

    @abstractmethod
    def complete(self, request: CompletionRequest) -> AsyncIterator[str]:
        """
        Stream a completion

        Args:
            request: Completion request

        Yields:
            str: Text chunks in arrival order

        Raises:
            ProviderError: Non-2xx answer or missing configuration
        """
        pass

    def info(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "type": self.type}

    async def collect(self, request: CompletionRequest) -> str:
        """
        Run a completion to the end and return the full text

        Used for internal, non-streamed calls (concept extraction); transient
        failures are retried.
        """
        @retry_on_provider_error()
        async def _run() -> str:
            parts = []
            async for chunk in self.complete(request):
                parts.append(chunk)
            return "".join(parts)

        return await _run()

    # ------------------------------------------------------------------
    # Helpers shared by the HTTP adapters
    # ------------------------------------------------------------------

    def build_prompt(self, request: CompletionRequest):
        """(system_prompt, user_message) for a request"""
        if request.raw_prompt:
            return None, request.text
        return self.prompt_builder.build(request.text, request.context, request.action)

    @asynccontextmanager
    async def _open_stream(
        self,
        url: str,
        payload: Dict,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, str]] = None,
    ):
        """
        POST a streaming request and yield the response once its status is known

        Raises:
            ProviderRateLimitError: On 429
            ProviderError: On any other non-2xx status
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            async with client.stream("POST", url, json=payload, headers=headers, params=params) as response:
                if response.status_code >= 400:
                    body = (await response.aread()).decode("utf-8", errors="replace")
                    message = f"{self.name} error: {response.status_code} - {body}"
                    logger.error(message)
                    error_cls = ProviderRateLimitError if response.status_code == 429 else ProviderError
                    raise error_cls(message, provider_id=self.id, status_code=response.status_code)
                yield response
