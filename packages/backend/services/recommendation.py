"""Request-level orchestration of the recommendation pipeline.

Order per request: resolve catalog candidates, run the deterministic
engine, optionally blend in the LLM ranking, then hand the result to the
analytics recorder without waiting for it.
"""

import logging
import time

from core.interfaces import CatalogQuery
from core.schemas import RecommendationConfig, RecommendationResponse

from .analytics import AnalyticsRecorder, RecommendationEvent
from .catalog import CatalogService
from .recommend import recommend
from .rerank import LLMReranker

logger = logging.getLogger(__name__)


class RecommendationService:
    """Produces a RecommendationResponse for a validated config."""

    def __init__(
        self,
        catalog: CatalogService,
        reranker: LLMReranker | None = None,
        recorder: AnalyticsRecorder | None = None,
    ):
        self._catalog = catalog
        self._reranker = reranker
        self._recorder = recorder

    @property
    def catalog(self) -> CatalogService:
        return self._catalog

    def _should_rerank(self, config: RecommendationConfig) -> bool:
        return (
            config.has_description
            and self._reranker is not None
            and self._reranker.available
        )

    async def recommend(self, config: RecommendationConfig) -> RecommendationResponse:
        """Recommend models for a config.

        Raises:
            NoModelsAvailableError: No catalog tier knows the task type.
        """
        start = time.perf_counter()

        task_models = await self._catalog.resolve_candidates(
            CatalogQuery(
                task_type=config.task_type,
                framework=config.inference_framework,
                quantization=config.quantization,
                deployment_target=config.deployment_target,
            )
        )

        result = recommend(config, task_models.models, task_models.warning_model)
        logger.info(
            "Deterministic top pick for %s: %s (score=%s)",
            config.task_type,
            result.primary.name,
            result.primary.score,
        )

        used_llm = False
        if self._should_rerank(config):
            candidates = [result.primary, *result.alternatives]
            try:
                result = await self._reranker.rerank(candidates, result.warning, config)
                used_llm = True
                logger.info(
                    "LLM rerank top pick: %s (score=%s)", result.primary.name, result.primary.score
                )
            except Exception:
                logger.exception("LLM rerank failed, falling back to deterministic ranking")

        response = RecommendationResponse(
            primary=result.primary,
            alternatives=result.alternatives,
            warning=result.warning,
            used_llm_reranking=used_llm,
        )

        if self._recorder is not None:
            self._recorder.record(
                RecommendationEvent(
                    config=config,
                    primary=response.primary,
                    alternatives=response.alternatives,
                    warning=response.warning,
                    used_llm_reranking=used_llm,
                    response_time_ms=int((time.perf_counter() - start) * 1000),
                )
            )

        return response
