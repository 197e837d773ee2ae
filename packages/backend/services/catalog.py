"""Catalog source chain.

Resolves candidate models for a task by trying each tier in order until one
succeeds. Every tier failure (not configured, network error, empty result)
is absorbed and logged; the static table is the last tier, so a known task
type always resolves.
"""

import asyncio
import logging
from collections.abc import Sequence

from core.cache import TTLCache
from core.exceptions import NoModelsAvailableError, SourceNotConfiguredError
from core.interfaces import CatalogQuery, ICatalogSource, SourceResult, TaskModels
from core.schemas import TASK_TYPES, ModelRecommendation

logger = logging.getLogger(__name__)


async def try_source(source: ICatalogSource, query: CatalogQuery) -> SourceResult:
    """Ask one tier for candidates, converting any failure into ``unavailable``."""
    try:
        data = await source.fetch(query)
    except SourceNotConfiguredError as e:
        logger.debug("Catalog tier %s not configured: %s", source.name, e)
        return SourceResult.unavailable(source.name, str(e), not_configured=True, error=e)
    except Exception as e:
        logger.warning("Catalog tier %s unavailable for %s: %s", source.name, query.cache_key, e)
        return SourceResult.unavailable(source.name, str(e), error=e)

    if not data.models:
        return SourceResult.unavailable(source.name, "empty result")
    return SourceResult.success(source.name, data)


async def first_available(
    sources: Sequence[ICatalogSource],
    query: CatalogQuery,
) -> tuple[SourceResult, list[SourceResult]]:
    """Try tiers in order and return the first success plus every attempt made."""
    attempts: list[SourceResult] = []
    for source in sources:
        result = await try_source(source, query)
        attempts.append(result)
        if result.ok:
            return result, attempts
    return attempts[-1] if attempts else SourceResult.unavailable("none", "no sources"), attempts


class CatalogService:
    """Ordered fallback over catalog tiers with a short-lived result cache."""

    def __init__(
        self,
        sources: Sequence[ICatalogSource],
        result_cache: TTLCache[TaskModels],
    ):
        """Initialize the chain.

        Args:
            sources: Tiers in priority order; the last should never fail for a known task
            result_cache: Cache of resolved candidates keyed by query
        """
        self._sources = list(sources)
        self._result_cache = result_cache

    @property
    def sources(self) -> list[ICatalogSource]:
        return list(self._sources)

    async def resolve_candidates(self, query: CatalogQuery) -> TaskModels:
        """Return candidates and the warning model for a query.

        Raises:
            NoModelsAvailableError: No tier knows the task type.
        """
        cached = self._result_cache.get(query.cache_key)
        if cached is not None:
            return cached

        result, attempts = await first_available(self._sources, query)
        if not result.ok:
            logger.error(
                "All catalog tiers failed for %s: %s",
                query.cache_key,
                "; ".join(f"{a.source}={a.reason}" for a in attempts),
            )
            raise NoModelsAvailableError(query.task_type)

        if len(attempts) > 1:
            logger.info("Catalog for %s served by %s tier", query.cache_key, result.source)

        self._result_cache.set(query.cache_key, result.data)
        return result.data

    async def get_all_models(self) -> list[ModelRecommendation]:
        """Every non-warning candidate across all task types, best first.

        Tasks are resolved concurrently; they are independent and merged
        afterwards. Models shared between tasks appear once.
        """
        results = await asyncio.gather(
            *(self.resolve_candidates(CatalogQuery(task_type=task)) for task in TASK_TYPES)
        )
        merged: dict[str, ModelRecommendation] = {}
        for task_models in results:
            for model in task_models.models:
                merged.setdefault(model.id, model)
        return sorted(merged.values(), key=lambda m: m.score, reverse=True)

    async def get_warning_models(self) -> list[ModelRecommendation]:
        """The warning model of every task type, in task order."""
        results = await asyncio.gather(
            *(self.resolve_candidates(CatalogQuery(task_type=task)) for task in TASK_TYPES)
        )
        return [task_models.warning_model for task_models in results]
