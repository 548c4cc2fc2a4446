"""AI providers: one streaming-completion interface over local and cloud LLMs"""

from synapse_reader.providers.base import AIProvider, CompletionRequest, ConversationTurn
from synapse_reader.providers.manager import ProviderManager

__all__ = ["AIProvider", "CompletionRequest", "ConversationTurn", "ProviderManager"]
