"""Application configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # API settings
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 3001
    FRONTEND_ORIGIN: str = "http://localhost:8080"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./infralens.db"

    # Hugging Face Hub (live catalog tier)
    HF_ENABLED: bool = True
    HF_API_URL: str = "https://huggingface.co/api"
    HF_TOKEN: str | None = None  # Optional, raises the anonymous rate limit
    HF_TIMEOUT_SECONDS: float = 10.0
    HF_CACHE_TTL_SECONDS: float = 3600.0  # Live catalog results
    RESULT_CACHE_TTL_SECONDS: float = 60.0  # Resolved candidates across all tiers

    # LLM re-ranking (disabled when no key is set)
    ANTHROPIC_API_KEY: str | None = None
    ANTHROPIC_API_URL: str = "https://api.anthropic.com"
    LLM_MODEL: str = "claude-haiku-4-5-20251001"
    LLM_TIMEOUT_SECONDS: float = 30.0

    # Auth for saved configs (disabled = single local user)
    AUTH_ENABLED: bool = False
    API_TOKENS: dict[str, str] = {}  # bearer token -> user id

    @property
    def llm_configured(self) -> bool:
        """Whether an LLM credential is available."""
        return bool(self.ANTHROPIC_API_KEY)

    model_config = {"env_prefix": "INFRALENS_", "env_file": ".env"}


settings = Settings()
