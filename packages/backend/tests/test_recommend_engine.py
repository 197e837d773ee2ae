"""Tests for the deterministic recommendation engine."""

import pytest

from core.exceptions import NoModelsAvailableError
from core.model_catalog import MODEL_DATABASE, WARNING_MODELS
from core.schemas import RecommendationConfig
from services.recommend import (
    apply_filters,
    filter_by_license,
    latency_adjustment,
    recommend,
    score_candidates,
)


def _config(**overrides) -> RecommendationConfig:
    fields = {
        "task_type": "classification",
        "gpu_memory": "8gb",
        "inference_device": "consumer-gpu",
        "max_latency": 150,
        "license_type": "permissive",
        "use_case_description": "",
    }
    fields.update(overrides)
    return RecommendationConfig(**fields)


def test_memory_filter_excludes_oversized_model(make_model):
    """A 16 GB model is dropped on an 8 GB tier and the 2 GB model wins."""
    big = make_model("big-model", memory_required="16 GB", license="Apache 2.0", score=95)
    small = make_model("small-model", memory_required="2 GB", license="MIT", score=70)
    warning = WARNING_MODELS["classification"]

    result = recommend(_config(), [big, small], warning)

    assert result.primary.id == "small-model"
    assert result.alternatives == []
    assert result.warning == warning


def test_mobile_description_reorders_primary(make_model):
    """The edge rule's 12 points lift a small model past a larger one."""
    mid = make_model("mid-model", memory_required="6 GB", score=88)
    tiny = make_model("tiny-model", memory_required="2 GB", score=80)
    warning = WARNING_MODELS["classification"]

    plain = recommend(_config(), [mid, tiny], warning)
    described = recommend(
        _config(use_case_description="I need this for a mobile app"), [mid, tiny], warning
    )

    assert plain.primary.id == "mid-model"
    assert described.primary.id == "tiny-model"
    # Catalog scores are reported unchanged
    assert described.primary.score == 80


def test_idempotent():
    """Identical inputs give identical outputs."""
    config = _config(use_case_description="high accuracy sentiment for a SaaS product")
    candidates = MODEL_DATABASE["classification"]
    warning = WARNING_MODELS["classification"]

    first = recommend(config, candidates, warning)
    second = recommend(config, candidates, warning)

    assert first.model_dump_json() == second.model_dump_json()


def test_memory_filter_never_collapses_pool(make_model):
    """When nothing fits the memory tier, the unfiltered pool is ranked."""
    a = make_model("a", memory_required="40 GB", score=70)
    b = make_model("b", memory_required="80 GB", score=90)

    pool = apply_filters(_config(gpu_memory="8gb"), [a, b])

    assert [m.id for m in pool] == ["a", "b"]
    assert recommend(_config(), [a, b], WARNING_MODELS["classification"]).primary.id == "b"


def test_license_filter_never_collapses_pool(make_model):
    """A permissive policy with no permissive candidates keeps everything."""
    a = make_model("a", license="Llama 3.1 Community")
    b = make_model("b", license="CC BY-NC 4.0")

    pool = apply_filters(_config(license_type="permissive"), [a, b])

    assert len(pool) == 2


@pytest.mark.parametrize("license_type", ["any", "commercial", "non-commercial"])
def test_non_permissive_policies_pass_everything(make_model, license_type):
    """Only the permissive policy filters."""
    models = [make_model("a", license="Llama 3.1 Community"), make_model("b", license="MIT")]
    assert filter_by_license(models, license_type) == models


def test_latency_adjustment_only_under_tight_budget(make_model):
    """Budgets of 100 ms or more leave scores alone."""
    model = make_model(latency="~5ms")
    assert latency_adjustment(model, 100) == 0.0
    assert latency_adjustment(model, 50) == pytest.approx(9.5)


def test_latency_monotonicity(make_model):
    """With equal base scores, the faster model never ranks below the slower one."""
    slow = make_model("slow", latency="~45ms/token", score=85)
    fast = make_model("fast", latency="~30ms/token", score=85)

    ranked = score_candidates(_config(max_latency=50), [slow, fast])

    assert [c.model.id for c in ranked] == ["fast", "slow"]
    assert ranked[0].adjusted_score > ranked[1].adjusted_score


def test_ties_keep_input_order(make_model):
    """Equal adjusted scores rank in catalog order."""
    a = make_model("a", score=80)
    b = make_model("b", score=80)

    ranked = score_candidates(_config(), [a, b])

    assert [c.model.id for c in ranked] == ["a", "b"]
    assert [c.position for c in ranked] == [0, 1]


def test_alternatives_capped_at_two():
    """Three or more candidates yield a primary and two alternatives."""
    result = recommend(
        _config(task_type="text-generation", gpu_memory="80gb", license_type="any"),
        MODEL_DATABASE["text-generation"],
        WARNING_MODELS["text-generation"],
    )

    assert result.primary.id == "llama-3.1-8b"
    assert [m.id for m in result.alternatives] == ["mistral-7b", "phi-3-mini"]
    assert result.warning.is_warning is True


def test_empty_candidates_raise():
    """An empty candidate list is an exhausted catalog."""
    with pytest.raises(NoModelsAvailableError):
        recommend(_config(), [], WARNING_MODELS["classification"])
