from __future__ import annotations

from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from project root (parent of backend/)
_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=str(_ENV_FILE), env_file_encoding="utf-8", extra="ignore")

    # App
    ENVIRONMENT: str = "dev"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # OpenAI-compatible API (moderation, embeddings, chat completions)
    OPENAI_API_KEY: SecretStr = SecretStr("")
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"

    # Supabase (vector store RPC over PostgREST)
    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_SERVICE_ROLE_KEY: SecretStr = SecretStr("")

    # Models
    EMBEDDING_MODEL: str = "text-embedding-ada-002"
    CHAT_MODEL: str = "gpt-4-mini"
    MAX_TOKENS: int = 512
    TEMPERATURE: float = 0.0

    # Retrieval
    MATCH_THRESHOLD: float = 0.78
    MATCH_COUNT: int = 10
    MIN_CONTENT_LENGTH: int = 50

    # Prompt
    CONTEXT_TOKEN_BUDGET: int = 1500
    TOKENIZER_ENCODING: str = "cl100k_base"
    DOCS_PRODUCT_NAME: str = "Supabase"

    # HTTP
    HTTP_TIMEOUT: float = 30.0  # seconds
    LLM_STREAM_TIMEOUT: float = 120.0  # seconds

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_SEARCH: str = "30/minute"
    RATE_LIMIT_STORAGE_URI: str = "memory://"


settings = Settings()
