"""
Unit tests for ProviderManager
"""

import pytest

from synapse_reader.providers.manager import ProviderManager


@pytest.mark.unit
class TestProviderManager:
    """Test ProviderManager"""

    def test_registers_all_providers(self, key_store):
        manager = ProviderManager(key_store=key_store)

        assert list(manager.providers) == ["ollama", "openai", "anthropic", "gemini"]
        assert manager.get("missing") is None

    def test_set_current(self, provider_manager):
        assert provider_manager.set_current("openai") is True
        assert provider_manager.get_current().id == "openai"

        assert provider_manager.set_current("nope") is False
        assert provider_manager.current_provider_id == "openai"

    @pytest.mark.asyncio
    async def test_refresh_picks_up_keys(self, key_store):
        manager = ProviderManager(key_store=key_store)
        assert await manager.get("anthropic").is_available() is False

        key_store.set_key("anthropic", "sk-ant")
        manager.refresh()

        assert manager.get("anthropic").api_key == "sk-ant"
        assert await manager.get("anthropic").is_available() is True

    @pytest.mark.asyncio
    async def test_availability_cached_until_invalidated(self, provider_manager, fake_provider):
        assert await provider_manager.is_available("fake") is True

        fake_provider.available = False
        assert await provider_manager.is_available("fake") is True

        provider_manager.invalidate("fake")
        assert await provider_manager.is_available("fake") is False

    @pytest.mark.asyncio
    async def test_zero_ttl_always_probes(self, key_store, make_provider):
        manager = ProviderManager(key_store=key_store, availability_ttl=0)
        provider = make_provider()
        manager.providers["fake"] = provider

        assert await manager.is_available("fake") is True
        provider.available = False
        assert await manager.is_available("fake") is False

    @pytest.mark.asyncio
    async def test_unknown_provider_unavailable(self, provider_manager):
        assert await provider_manager.is_available("nope") is False

    @pytest.mark.asyncio
    async def test_list_statuses(self, key_store, make_provider):
        key_store.set_key("openai", "sk-test")
        manager = ProviderManager(key_store=key_store)
        manager.providers["ollama"] = make_provider(available=False)

        statuses = {s["id"]: s for s in await manager.list_statuses()}

        assert statuses["openai"]["available"] is True
        assert statuses["openai"]["type"] == "cloud"
        assert statuses["gemini"]["available"] is False
        assert statuses["fake"]["available"] is False
