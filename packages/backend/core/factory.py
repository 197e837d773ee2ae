"""Adapter factory for dependency injection.

Builds the catalog tier chain, the AI service, the auth provider and the
services composed from them. Optional tiers are switched on by settings:
the Hugging Face tier by HF_ENABLED, LLM re-ranking by an Anthropic key,
bearer-token auth by AUTH_ENABLED.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .config import Settings

if TYPE_CHECKING:
    from core.interfaces import IAIService, IAuthProvider, ICatalogSource
    from services.analytics import AnalyticsRecorder
    from services.catalog import CatalogService
    from services.recommendation import RecommendationService
    from services.rerank import LLMReranker

logger = logging.getLogger(__name__)


@dataclass
class AdapterConfig:
    """Configuration for adapter selection."""

    # Database
    database_url: str

    # Hugging Face Hub
    hf_enabled: bool = True
    hf_api_url: str = "https://huggingface.co/api"
    hf_token: str | None = None
    hf_timeout_seconds: float = 10.0
    hf_cache_ttl_seconds: float = 3600.0

    # Resolved candidates across all tiers
    result_cache_ttl_seconds: float = 60.0

    # AI
    anthropic_api_key: str | None = None
    anthropic_api_url: str = "https://api.anthropic.com"
    llm_model: str = "claude-haiku-4-5-20251001"
    llm_timeout_seconds: float = 30.0

    # Auth
    auth_enabled: bool = False
    api_tokens: dict[str, str] = field(default_factory=dict)


class AdapterFactory:
    """Factory for creating adapter and service instances.

    Usage:
        from core.factory import get_factory

        factory = get_factory()
        service = factory.create_recommendation_service()
        auth = factory.create_auth_provider()
    """

    def __init__(self, config: AdapterConfig):
        self._config = config

    @property
    def config(self) -> AdapterConfig:
        return self._config

    def create_catalog_sources(self) -> list["ICatalogSource"]:
        """Create catalog tiers in fallback order: hub, database, static."""
        from adapters.catalog import (
            DatabaseCatalogSource,
            HuggingFaceCatalogSource,
            StaticCatalogSource,
        )
        from core.cache import TTLCache
        from persistence.database import get_session_factory

        sources: list[ICatalogSource] = []

        if self._config.hf_enabled:
            logger.info("Enabling Hugging Face catalog tier (url=%s)", self._config.hf_api_url)
            sources.append(
                HuggingFaceCatalogSource(
                    cache=TTLCache(self._config.hf_cache_ttl_seconds, name="hub"),
                    base_url=self._config.hf_api_url,
                    token=self._config.hf_token,
                    timeout=self._config.hf_timeout_seconds,
                )
            )
        else:
            logger.info("Hugging Face catalog tier disabled")

        sources.append(DatabaseCatalogSource(get_session_factory()))
        sources.append(StaticCatalogSource())
        return sources

    def create_catalog_service(self) -> "CatalogService":
        from core.cache import TTLCache
        from services.catalog import CatalogService

        return CatalogService(
            self.create_catalog_sources(),
            TTLCache(self._config.result_cache_ttl_seconds, name="result"),
        )

    def create_ai_service(self) -> "IAIService":
        """Create the LLM service used for re-ranking.

        The service is returned even without a key; it then reports itself
        unavailable.
        """
        from adapters.ai import AnthropicAIService

        if self._config.anthropic_api_key:
            logger.info("Creating Anthropic AI service (model=%s)", self._config.llm_model)
        else:
            logger.info("No Anthropic API key set, LLM re-ranking disabled")

        return AnthropicAIService(
            api_key=self._config.anthropic_api_key,
            model=self._config.llm_model,
            base_url=self._config.anthropic_api_url,
            timeout=self._config.llm_timeout_seconds,
        )

    def create_reranker(self) -> "LLMReranker | None":
        from services.rerank import LLMReranker

        ai_service = self.create_ai_service()
        if not ai_service.is_available():
            return None
        return LLMReranker(ai_service, model=self._config.llm_model)

    def create_analytics_recorder(self) -> "AnalyticsRecorder":
        from persistence.database import get_session_factory
        from services.analytics import AnalyticsRecorder

        return AnalyticsRecorder(get_session_factory())

    def create_recommendation_service(
        self,
        catalog: "CatalogService | None" = None,
        recorder: "AnalyticsRecorder | None" = None,
    ) -> "RecommendationService":
        from services.recommendation import RecommendationService

        return RecommendationService(
            catalog=catalog or self.create_catalog_service(),
            reranker=self.create_reranker(),
            recorder=recorder or self.create_analytics_recorder(),
        )

    def create_auth_provider(self) -> "IAuthProvider":
        """Create an authentication provider.

        AUTH_ENABLED=false: NoAuthProvider (single local user)
        AUTH_ENABLED=true: TokenAuthProvider over API_TOKENS
        """
        if self._config.auth_enabled:
            from adapters.auth.token import TokenAuthProvider

            logger.info("Creating TokenAuthProvider (%d tokens)", len(self._config.api_tokens))
            return TokenAuthProvider(self._config.api_tokens)

        from adapters.auth.no_auth import NoAuthProvider

        logger.info("Creating NoAuthProvider (no authentication)")
        return NoAuthProvider()


def create_factory_from_settings(settings: Settings) -> AdapterFactory:
    """Create an AdapterFactory from application settings."""
    config = AdapterConfig(
        database_url=settings.DATABASE_URL,
        # Hugging Face settings
        hf_enabled=settings.HF_ENABLED,
        hf_api_url=settings.HF_API_URL,
        hf_token=settings.HF_TOKEN,
        hf_timeout_seconds=settings.HF_TIMEOUT_SECONDS,
        hf_cache_ttl_seconds=settings.HF_CACHE_TTL_SECONDS,
        result_cache_ttl_seconds=settings.RESULT_CACHE_TTL_SECONDS,
        # AI settings
        anthropic_api_key=settings.ANTHROPIC_API_KEY,
        anthropic_api_url=settings.ANTHROPIC_API_URL,
        llm_model=settings.LLM_MODEL,
        llm_timeout_seconds=settings.LLM_TIMEOUT_SECONDS,
        # Auth settings
        auth_enabled=settings.AUTH_ENABLED,
        api_tokens=dict(settings.API_TOKENS),
    )

    return AdapterFactory(config)


# Convenience function for creating adapters from global settings
def get_factory() -> AdapterFactory:
    """Get the adapter factory using global settings."""
    from .config import settings
    return create_factory_from_settings(settings)
