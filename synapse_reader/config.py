"""
Configuration management for Synapse Reader
Uses pydantic-settings for environment variable validation
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import model_validator
from typing import List
import os


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    APP_NAME: str = "Synapse Reader"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # API (local only: the desktop shell talks to this process)
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000
    API_RELOAD: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Storage
    DATA_DIR: str = "./data"
    DATABASE_URL: str = ""  # Empty = sqlite file inside DATA_DIR
    KEYS_FILE: str = "api-keys.encrypted"
    MASTER_KEY_FILE: str = "master.key"

    # Providers
    DEFAULT_PROVIDER: str = "ollama"  # ollama, openai, anthropic, gemini
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "llama3.2"
    OLLAMA_PROBE_TIMEOUT: float = 2.0
    OPENAI_API_URL: str = "https://api.openai.com/v1/chat/completions"
    OPENAI_MODEL: str = "gpt-4o-mini"
    ANTHROPIC_API_URL: str = "https://api.anthropic.com/v1/messages"
    ANTHROPIC_MODEL: str = "claude-3-5-haiku-latest"
    ANTHROPIC_VERSION: str = "2023-06-01"
    GEMINI_API_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"
    GEMINI_MODEL: str = "gemini-1.5-flash"

    # Generation
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 2048
    LLM_TIMEOUT: int = 60  # Timeout in seconds for LLM requests

    # Provider availability cache
    PROVIDER_AVAILABILITY_TTL: float = 30.0  # seconds

    # Stream buffering (flush at whichever comes first)
    STREAM_BUFFER_SIZE: int = 500  # characters
    STREAM_BUFFER_INTERVAL_MS: int = 50

    # Retry Logic
    RETRY_ENABLED: bool = True
    RETRY_MAX_ATTEMPTS: int = 3
    RETRY_EXPONENTIAL_BASE: int = 2

    # List defaults
    RECENT_DOCUMENTS_LIMIT: int = 3
    RECENT_INTERACTIONS_LIMIT: int = 50
    RECENT_CONVERSATIONS_LIMIT: int = 10
    ACTIVITY_DAYS: int = 90
    SEARCH_LIMIT: int = 20
    SEARCH_LIMIT_PER_TYPE: int = 10

    @model_validator(mode='after')
    def derive_database_url(self):
        """
        Point DATABASE_URL at a SQLite file inside DATA_DIR when not set explicitly
        """
        if not self.DATABASE_URL:
            db_path = os.path.join(self.DATA_DIR, "synapse.db")
            self.DATABASE_URL = f"sqlite:///{db_path}"
        return self


# Global settings instance
settings = Settings()


# Providers known to the application, in display order
PROVIDER_IDS = ["ollama", "openai", "anthropic", "gemini"]
