"""
Provider Manager - registry of AI providers and the current selection
"""

import logging
import time
from typing import Dict, List, Optional, Tuple

from synapse_reader.config import settings, PROVIDER_IDS
from synapse_reader.core.security import KeyStore
from synapse_reader.providers.base import AIProvider
from synapse_reader.providers.ollama import OllamaProvider
from synapse_reader.providers.openai import OpenAIProvider
from synapse_reader.providers.anthropic import AnthropicProvider
from synapse_reader.providers.gemini import GeminiProvider

logger = logging.getLogger(__name__)


class ProviderManager:
    """
    Holds one instance per provider and tracks which one is current.

    Cloud providers are rebuilt from the key store on `refresh()`; the
    availability of each provider is cached for PROVIDER_AVAILABILITY_TTL
    seconds so listing providers does not probe Ollama on every call.

    Args:
        key_store: Encrypted key store for cloud API keys
        availability_ttl: Cache lifetime in seconds (default from settings)
    """

    def __init__(self, key_store: Optional[KeyStore] = None, availability_ttl: Optional[float] = None):
        self.key_store = key_store or KeyStore()
        self.availability_ttl = (
            settings.PROVIDER_AVAILABILITY_TTL if availability_ttl is None else availability_ttl
        )
        self.providers: Dict[str, AIProvider] = {}
        self._availability: Dict[str, Tuple[bool, float]] = {}
        self.current_provider_id = (
            settings.DEFAULT_PROVIDER if settings.DEFAULT_PROVIDER in PROVIDER_IDS else "ollama"
        )
        self.refresh()

    def refresh(self) -> None:
        """Rebuild providers so freshly stored API keys take effect"""
        self.providers = {
            "ollama": OllamaProvider(),
            "openai": OpenAIProvider(api_key=self.key_store.get_key("openai")),
            "anthropic": AnthropicProvider(api_key=self.key_store.get_key("anthropic")),
            "gemini": GeminiProvider(api_key=self.key_store.get_key("gemini")),
        }
        logger.debug("Providers refreshed")

    def get(self, provider_id: str) -> Optional[AIProvider]:
        return self.providers.get(provider_id)

    def get_current(self) -> AIProvider:
        return self.providers[self.current_provider_id]

    def set_current(self, provider_id: str) -> bool:
        """Select the current provider; False for unknown ids"""
        if provider_id not in self.providers:
            logger.warning(f"Unknown provider requested: {provider_id}")
            return False
        self.current_provider_id = provider_id
        logger.info(f"Current provider set to {provider_id}")
        return True

    def invalidate(self, provider_id: Optional[str] = None) -> None:
        """Drop cached availability for one provider (or all)"""
        if provider_id is None:
            self._availability.clear()
        else:
            self._availability.pop(provider_id, None)

    async def is_available(self, provider_id: str) -> bool:
        provider = self.get(provider_id)
        if provider is None:
            return False

        cached = self._availability.get(provider_id)
        now = time.monotonic()
        if cached is not None and now - cached[1] < self.availability_ttl:
            return cached[0]

        available = await provider.is_available()
        self._availability[provider_id] = (available, now)
        return available

    async def list_statuses(self) -> List[Dict]:
        """Info plus availability for every provider, in registration order"""
        statuses = []
        for provider_id, provider in self.providers.items():
            status = provider.info()
            status["available"] = await self.is_available(provider_id)
            statuses.append(status)
        return statuses
