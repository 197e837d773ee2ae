"""Tests for Hub-derived metadata and scoring."""

from datetime import datetime, timezone

import pytest

from services import hub_scoring

NOW = datetime(2026, 10, 19, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "model_id,expected",
    [
        ("meta-llama/Llama-3.1-8B-Instruct", 8e9),
        ("Qwen/Qwen2.5-0.5B", 0.5e9),
        ("Salesforce/codegen-350M-mono", 350e6),
        ("google-bert/bert-base-uncased", None),
    ],
)
def test_params_from_name(model_id, expected):
    assert hub_scoring.params_from_name(model_id) == expected


def test_resolve_prefers_safetensors():
    raw = {"modelId": "org/thing-7B", "safetensors": {"total": 7_241_732_096}}
    assert hub_scoring.resolve_param_count(raw) == 7_241_732_096


def test_resolve_falls_back_to_architecture():
    raw = {"modelId": "google-bert/bert-base-uncased", "tags": []}
    assert hub_scoring.resolve_param_count(raw) == 110e6


def test_resolve_unknown_is_none():
    assert hub_scoring.resolve_param_count({"modelId": "someone/mystery-model"}) is None


@pytest.mark.parametrize(
    "count,expected",
    [(7e9, "7B"), (1.5e9, "1.5B"), (335e6, "335M"), (900e3, "900K")],
)
def test_format_params(count, expected):
    assert hub_scoring.format_params(count) == expected


def test_memory_and_latency_estimates():
    assert hub_scoring.estimate_memory(7e9) == "13 GB"
    assert hub_scoring.estimate_memory(1e9) == "1.9 GB"
    assert hub_scoring.estimate_memory(110e6) == "210 MB"
    assert hub_scoring.estimate_latency(8e9) == "~40ms/token"
    assert hub_scoring.estimate_latency(110e6) == "~5ms"


def test_extract_license():
    assert hub_scoring.extract_license(["pytorch", "license:apache-2.0"]) == "Apache 2.0"
    assert hub_scoring.extract_license(["license:llama3"]) == "llama3"
    assert hub_scoring.extract_license([]) == "Unknown"


def test_days_since_update():
    assert hub_scoring.days_since_update("2026-10-09T00:00:00.000Z", NOW) == pytest.approx(10)
    assert hub_scoring.days_since_update(None, NOW) == hub_scoring.DEFAULT_AGE_DAYS
    assert hub_scoring.days_since_update("not a date", NOW) == hub_scoring.DEFAULT_AGE_DAYS


def test_recency_decay():
    assert hub_scoring.recency_points(10) == 20
    assert hub_scoring.recency_points(105) == pytest.approx(10)
    assert hub_scoring.recency_points(200) == 0


def test_score_lone_model_gets_size_midpoint():
    """A one-model batch has no size spread: 30 + 20 + 15 + 10 + 12.5 rounds to 88."""
    score = hub_scoring.score_hub_model(
        downloads=1_000_000,
        likes=500,
        days=10,
        license_label="MIT",
        param_count=7e9,
        max_downloads=1_000_000,
        max_likes=500,
        max_params=7e9,
        min_params=7e9,
    )
    assert score == 88


def test_score_largest_in_spread_batch_gets_no_size_points():
    score = hub_scoring.score_hub_model(
        downloads=1_000_000,
        likes=500,
        days=10,
        license_label="MIT",
        param_count=7e9,
        max_downloads=1_000_000,
        max_likes=500,
        max_params=7e9,
        min_params=1e9,
    )
    assert score == 75


def test_score_rounds_half_up():
    """20 recency + 12 license + 12.5 size is 44.5, which rounds to 45."""
    score = hub_scoring.score_hub_model(
        downloads=0,
        likes=0,
        days=5,
        license_label="CC BY 4.0",
        param_count=7e9,
        max_downloads=100,
        max_likes=10,
        max_params=14e9,
        min_params=7e9,
    )
    assert score == 45


def test_days_since_update_non_string():
    """Epoch numbers and other non-strings count as the default age."""
    assert hub_scoring.days_since_update(1_700_000_000, NOW) == hub_scoring.DEFAULT_AGE_DAYS
    assert hub_scoring.days_since_update({"at": "2026-01-01"}, NOW) == hub_scoring.DEFAULT_AGE_DAYS


def test_reasoning_text():
    assert hub_scoring.generate_reasoning(2_500_000, 10, "MIT", 110e6) == (
        "Highly popular with 2.5M+ downloads. Recently updated. "
        "Permissive MIT license. Lightweight and efficient."
    )
    assert hub_scoring.generate_reasoning(0, 400, "Unknown", 7e9) == (
        "Community model from Hugging Face Hub."
    )


def test_tradeoffs_capped_at_three():
    tradeoffs = hub_scoring.generate_tradeoffs(7e9, "Unknown", 400, 500, 1, "x/distil-gptq-7b")
    assert len(tradeoffs) == 3
    assert tradeoffs[0].startswith("Mid-size model")
    assert tradeoffs[1].startswith("License not specified")
