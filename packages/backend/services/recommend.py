"""Deterministic recommendation engine.

Pure and reproducible: the same config and candidate list always produce
the same result. Steps, in order:

1. Memory filter against the GPU tier.
2. License filter (only "permissive" is enforced).
3. Latency bonus when the budget is under 100 ms.
4. Use-case bonus when a description is given.
5. Stable sort on the adjusted score.

A filter that would remove every candidate is skipped. Adjusted scores are
kept on a separate ``ScoredCandidate`` record and only decide the order;
returned models keep their catalog score.
"""

import logging
from dataclasses import dataclass

from core.exceptions import NoModelsAvailableError
from core.schemas import ModelRecommendation, RecommendationConfig, RecommendationResult

from .model_metrics import is_permissive_license, parse_latency_ms, parse_memory_gb
from .use_case import matched_rules, use_case_bonus

logger = logging.getLogger(__name__)

# Budgets at or above this get no latency adjustment
RELAXED_LATENCY_MS = 100
LATENCY_WEIGHT = 0.1
ALTERNATIVE_COUNT = 2


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate with its per-request ranking score."""

    model: ModelRecommendation
    position: int  # index in the filtered pool, for stable tie-breaks
    adjusted_score: float


def filter_by_memory(
    models: list[ModelRecommendation],
    max_memory_gb: float,
) -> list[ModelRecommendation]:
    return [m for m in models if parse_memory_gb(m.memory_required) <= max_memory_gb]


def filter_by_license(
    models: list[ModelRecommendation],
    license_type: str,
) -> list[ModelRecommendation]:
    """Apply the license policy.

    "commercial" and "non-commercial" pass everything through; the catalog
    has no metadata to classify those terms.
    """
    if license_type == "permissive":
        return [m for m in models if is_permissive_license(m.license)]
    return models


def latency_adjustment(model: ModelRecommendation, max_latency: int) -> float:
    """Bonus for fast models under tight budgets; negative for slow ones."""
    if max_latency >= RELAXED_LATENCY_MS:
        return 0.0
    return (RELAXED_LATENCY_MS - parse_latency_ms(model.latency)) * LATENCY_WEIGHT


def apply_filters(
    config: RecommendationConfig,
    candidates: list[ModelRecommendation],
) -> list[ModelRecommendation]:
    """Memory then license filter, each skipped if it would empty the pool."""
    pool = list(candidates)

    max_memory_gb = parse_memory_gb(config.gpu_memory)
    if max_memory_gb > 0:
        fitting = filter_by_memory(pool, max_memory_gb)
        if fitting:
            pool = fitting
        else:
            logger.debug("Memory filter (%s GB) would remove all candidates, skipped", max_memory_gb)

    licensed = filter_by_license(pool, config.license_type)
    if licensed:
        pool = licensed
    else:
        logger.debug("License filter (%s) would remove all candidates, skipped", config.license_type)

    return pool


def score_candidates(
    config: RecommendationConfig,
    pool: list[ModelRecommendation],
) -> list[ScoredCandidate]:
    """Compute adjusted scores and return candidates best first."""
    rules = matched_rules(config.use_case_description) if config.has_description else []

    scored = []
    for position, model in enumerate(pool):
        adjusted = model.score + latency_adjustment(model, config.max_latency)
        if config.has_description:
            adjusted += use_case_bonus(config.use_case_description, model, rules)
        scored.append(ScoredCandidate(model=model, position=position, adjusted_score=adjusted))

    # sorted() is stable, so ties keep their input order
    return sorted(scored, key=lambda c: -c.adjusted_score)


def recommend(
    config: RecommendationConfig,
    candidates: list[ModelRecommendation],
    warning_model: ModelRecommendation,
) -> RecommendationResult:
    """Filter, score and rank candidates for a config.

    Args:
        config: Validated user constraints
        candidates: Non-warning models for the task
        warning_model: The task's designated model to avoid, returned as-is

    Returns:
        RecommendationResult with the top pick and up to two alternatives

    Raises:
        NoModelsAvailableError: The candidate list is empty.
    """
    if not candidates:
        raise NoModelsAvailableError(config.task_type)

    ranked = [c.model for c in score_candidates(config, apply_filters(config, candidates))]

    return RecommendationResult(
        primary=ranked[0] if ranked else candidates[0],
        alternatives=ranked[1:1 + ALTERNATIVE_COUNT],
        warning=warning_model,
    )
