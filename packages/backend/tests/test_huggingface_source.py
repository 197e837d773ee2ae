"""Tests for the Hugging Face catalog tier."""

from datetime import datetime, timezone

import httpx
import pytest

from adapters.catalog import HuggingFaceCatalogSource
from adapters.catalog.huggingface import build_recommendations
from core.cache import TTLCache
from core.exceptions import SourceUnavailableError
from core.interfaces import CatalogQuery

NOW = datetime(2026, 10, 19, tzinfo=timezone.utc)

CLASSIFICATION_LISTING = [
    {
        "modelId": "FacebookAI/roberta-large",
        "downloads": 2_000_000,
        "likes": 300,
        "lastModified": "2026-10-01T00:00:00.000Z",
        "tags": ["license:mit"],
    },
    {
        "id": "distilbert/distilbert-base-uncased-finetuned-sst-2-english",
        "downloads": 5_000_000,
        "likes": 800,
        "lastModified": "2025-01-01T00:00:00Z",
        "tags": ["license:apache-2.0"],
    },
    # No resolvable parameter count, dropped
    {"modelId": "someone/mystery-model", "downloads": 10, "likes": 0, "tags": []},
    # No id, skipped
    {"downloads": 1},
]


def _source(handler, clock, token=None) -> HuggingFaceCatalogSource:
    return HuggingFaceCatalogSource(
        cache=TTLCache(3600.0, clock=clock, name="hub"),
        base_url="https://hub.test/api",
        token=token,
        transport=httpx.MockTransport(handler),
        now=lambda: NOW,
    )


@pytest.mark.asyncio
async def test_fetch_scores_listing(clock):
    """Listings become scored recommendations; the warning model stays curated."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        seen["path"] = request.url.path
        return httpx.Response(200, json=CLASSIFICATION_LISTING)

    result = await _source(handler, clock).fetch(CatalogQuery(task_type="classification"))

    assert seen["path"] == "/api/models"
    assert seen["params"] == {
        "pipeline_tag": "text-classification",
        "sort": "downloads",
        "direction": "-1",
        "limit": "50",
    }
    assert {m.id for m in result.models} == {
        "FacebookAI/roberta-large",
        "distilbert/distilbert-base-uncased-finetuned-sst-2-english",
    }
    roberta = next(m for m in result.models if m.id == "FacebookAI/roberta-large")
    assert roberta.provider == "FacebookAI"
    assert roberta.name == "roberta-large"
    assert roberta.parameters == "355M"
    assert roberta.license == "MIT"
    assert 0 <= roberta.score <= 100
    assert result.models == sorted(result.models, key=lambda m: m.score, reverse=True)
    assert result.warning_model.id == "bert-base"


def test_same_size_batch_scores_size_midpoint():
    """Equal-size models share the size midpoint instead of scoring zero."""
    listing = [
        {"modelId": "a/alpha-7b", "downloads": 100, "likes": 10, "tags": ["license:mit"],
         "lastModified": "2026-10-09T00:00:00Z"},
        {"modelId": "b/beta-7b", "downloads": 100, "likes": 10, "tags": ["license:mit"],
         "lastModified": "2026-10-09T00:00:00Z"},
    ]

    models = build_recommendations(listing, now=NOW)

    assert [m.score for m in models] == [88, 88]


def test_non_string_timestamp_keeps_model():
    """An epoch lastModified scores as 90 days old rather than failing the batch."""
    listing = [
        {"modelId": "a/b-7b", "downloads": 100, "likes": 10, "tags": ["license:mit"],
         "lastModified": 1_700_000_000},
    ]

    models = build_recommendations(listing, now=NOW)

    # 30 + 12 recency (90 days) + 15 + 10 + 12.5
    assert [m.id for m in models] == ["a/b-7b"]
    assert models[0].score == 80


@pytest.mark.asyncio
async def test_code_generation_keeps_only_code_models(clock):
    listing = [
        {"modelId": "Qwen/Qwen2.5-Coder-7B-Instruct", "downloads": 1000, "likes": 5, "tags": []},
        {"modelId": "meta-llama/Llama-3.1-8B", "downloads": 9000, "likes": 50, "tags": []},
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["pipeline_tag"] == "text-generation"
        return httpx.Response(200, json=listing)

    result = await _source(handler, clock).fetch(CatalogQuery(task_type="code-generation"))

    assert [m.id for m in result.models] == ["Qwen/Qwen2.5-Coder-7B-Instruct"]
    assert result.warning_model.id == "codegen-350m"


@pytest.mark.asyncio
async def test_token_sent_as_bearer(clock):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer hf_secret"
        return httpx.Response(200, json=CLASSIFICATION_LISTING)

    await _source(handler, clock, token="hf_secret").fetch(CatalogQuery(task_type="classification"))


@pytest.mark.asyncio
async def test_results_cached_until_ttl(clock):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=CLASSIFICATION_LISTING)

    source = _source(handler, clock)
    query = CatalogQuery(task_type="classification")

    await source.fetch(query)
    await source.fetch(query)
    assert len(calls) == 1

    clock.advance(3601)
    await source.fetch(query)
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_timeout_is_unavailable(clock):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(SourceUnavailableError, match="timed out"):
        await _source(handler, clock).fetch(CatalogQuery(task_type="classification"))


@pytest.mark.asyncio
async def test_error_status_is_unavailable(clock):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    with pytest.raises(SourceUnavailableError, match="503"):
        await _source(handler, clock).fetch(CatalogQuery(task_type="classification"))


@pytest.mark.asyncio
async def test_unusable_listing_is_unavailable(clock):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"modelId": "someone/mystery-model"}])

    with pytest.raises(SourceUnavailableError):
        await _source(handler, clock).fetch(CatalogQuery(task_type="classification"))


@pytest.mark.asyncio
async def test_non_list_payload_is_unavailable(clock):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "rate limited"})

    with pytest.raises(SourceUnavailableError):
        await _source(handler, clock).fetch(CatalogQuery(task_type="classification"))
