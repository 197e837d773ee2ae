"""Hugging Face Hub catalog source.

Implements ICatalogSource against the public models listing endpoint
(``GET /api/models``). Listings are scored with ``services.hub_scoring``
and cached for an hour per query key. The warning model is never sourced
live; it always comes from the curated table.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import httpx

from core.cache import TTLCache
from core.exceptions import SourceUnavailableError
from core.interfaces import CatalogQuery, ICatalogSource, TaskModels
from core.model_catalog import get_warning_model
from core.schemas import ModelRecommendation
from services import hub_scoring

logger = logging.getLogger(__name__)

TASK_TO_PIPELINE: dict[str, str] = {
    "text-generation": "text-generation",
    "classification": "text-classification",
    "summarization": "summarization",
    "question-answering": "question-answering",
    "code-generation": "text-generation",
    "embedding": "feature-extraction",
}

FETCH_LIMIT = 50
TOP_N = 10

CODE_ID_MARKERS = ("code", "coder", "starcoder")


def _is_code_model(raw: dict[str, Any]) -> bool:
    lower = (raw.get("modelId") or raw.get("id") or "").lower()
    if any(marker in lower for marker in CODE_ID_MARKERS):
        return True
    return any("code" in tag.lower() for tag in raw.get("tags") or [])


def _split_model_id(model_id: str) -> tuple[str, str]:
    """Split ``org/name`` into (provider, name)."""
    parts = model_id.split("/")
    if len(parts) > 1:
        return parts[0], parts[1]
    return "Community", parts[0]


def build_recommendations(
    raw_models: list[dict[str, Any]],
    now: datetime,
    limit: int = TOP_N,
) -> list[ModelRecommendation]:
    """Turn raw Hub listings into scored recommendations, best first.

    Models whose parameter count cannot be resolved are dropped. Scores are
    normalized against the maxima of the surviving batch.
    """
    resolved: list[tuple[dict[str, Any], float]] = []
    for raw in raw_models:
        if not (raw.get("modelId") or raw.get("id")):
            continue
        count = hub_scoring.resolve_param_count(raw)
        if count and count > 0:
            resolved.append((raw, count))

    if not resolved:
        return []

    max_downloads = max(raw.get("downloads") or 0 for raw, _ in resolved)
    max_likes = max(raw.get("likes") or 0 for raw, _ in resolved)
    max_params = max(count for _, count in resolved)
    min_params = min(count for _, count in resolved)

    recommendations: list[ModelRecommendation] = []
    for raw, count in resolved:
        model_id = raw.get("modelId") or raw.get("id")
        tags = raw.get("tags") or []
        downloads = raw.get("downloads") or 0
        likes = raw.get("likes") or 0
        license_label = hub_scoring.extract_license(tags)
        days = hub_scoring.days_since_update(raw.get("lastModified"), now)
        provider, name = _split_model_id(model_id)

        recommendations.append(
            ModelRecommendation(
                id=model_id,
                name=name,
                provider=provider,
                parameters=hub_scoring.format_params(count),
                memory_required=hub_scoring.estimate_memory(count),
                latency=hub_scoring.estimate_latency(count),
                license=license_label,
                score=hub_scoring.score_hub_model(
                    downloads=downloads,
                    likes=likes,
                    days=days,
                    license_label=license_label,
                    param_count=count,
                    max_downloads=max_downloads,
                    max_likes=max_likes,
                    max_params=max_params,
                    min_params=min_params,
                ),
                reasoning=hub_scoring.generate_reasoning(downloads, days, license_label, count),
                tradeoffs=hub_scoring.generate_tradeoffs(
                    count, license_label, days, downloads, likes, model_id
                ),
            )
        )

    recommendations.sort(key=lambda m: m.score, reverse=True)
    return recommendations[:limit]


class HuggingFaceCatalogSource(ICatalogSource):
    """Live catalog tier backed by the Hugging Face Hub API."""

    name = "huggingface"

    def __init__(
        self,
        cache: TTLCache[list[ModelRecommendation]],
        base_url: str = "https://huggingface.co/api",
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        now: Callable[[], datetime] | None = None,
    ):
        """Initialize the Hub source.

        Args:
            cache: Per-query cache of scored listings
            base_url: Hub API root
            token: Optional Hugging Face access token
            timeout: Hard timeout for the listing request, in seconds
            transport: Optional httpx transport (tests use MockTransport)
            now: Clock used for recency scoring
        """
        self._cache = cache
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport
        self._now = now or (lambda: datetime.now(timezone.utc))

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _list_models(self, pipeline_tag: str) -> list[dict[str, Any]]:
        params = {
            "pipeline_tag": pipeline_tag,
            "sort": "downloads",
            "direction": "-1",
            "limit": str(FETCH_LIMIT),
        }
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._headers(),
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get("/models", params=params)
        except httpx.TimeoutException as e:
            raise SourceUnavailableError(f"Hub request timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise SourceUnavailableError(f"Hub request failed: {e}") from e

        if response.status_code != 200:
            raise SourceUnavailableError(
                f"Hub API returned {response.status_code}: {response.reason_phrase}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise SourceUnavailableError("Hub API returned invalid JSON") from e
        if not isinstance(payload, list):
            raise SourceUnavailableError("Hub API returned an unexpected payload")
        return [item for item in payload if isinstance(item, dict)]

    async def fetch(self, query: CatalogQuery) -> TaskModels:
        warning_model = get_warning_model(query.task_type)
        pipeline_tag = TASK_TO_PIPELINE.get(query.task_type)
        if pipeline_tag is None or warning_model is None:
            raise SourceUnavailableError(f"No Hub pipeline mapping for task type: {query.task_type}")

        cache_key = f"hf:{query.cache_key}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug("Hub cache hit for %s", cache_key)
            return TaskModels(models=cached, warning_model=warning_model)

        logger.info("Fetching %s models from Hugging Face Hub", query.task_type)
        raw_models = await self._list_models(pipeline_tag)

        if query.task_type == "code-generation":
            raw_models = [raw for raw in raw_models if _is_code_model(raw)]

        models = build_recommendations(raw_models, now=self._now())
        if not models:
            raise SourceUnavailableError(f"No valid Hub models for task: {query.task_type}")

        self._cache.set(cache_key, models)
        logger.info("Cached %d Hub models for %s", len(models), cache_key)
        return TaskModels(models=models, warning_model=warning_model)
