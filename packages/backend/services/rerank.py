"""LLM re-ranking of deterministic candidates.

When the user describes their use case, the language model scores each
candidate's fit (0-100) and rewrites its reasoning. Final scores blend 60%
catalog score with 40% fit score, which bounds how far the model can move
the ranking. Any unparseable response falls back to the deterministic order.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from core.interfaces import ChatMessage, ChatOptions, IAIService
from core.schemas import ModelRecommendation, RecommendationConfig, RecommendationResult

logger = logging.getLogger(__name__)

BASE_WEIGHT = 0.6
FIT_WEIGHT = 0.4
ALTERNATIVE_COUNT = 2

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)

SYSTEM_PROMPT = """You are an ML infrastructure advisor specializing in open-source model selection.
Given a list of candidate models and a user's described use case, you must:
1. Re-rank the models by how well they fit the described use case
2. Rewrite the reasoning for each model to be specific and useful for this exact use case
3. Return ONLY valid JSON, no markdown and no explanation outside the JSON

Be practical and honest. Mention specific strengths or risks relevant to the use case."""


@dataclass(frozen=True)
class LlmRanking:
    """One entry of the model's answer."""

    id: str
    fit_score: float
    reasoning: str | None


def _candidate_payload(model: ModelRecommendation) -> dict[str, Any]:
    return {
        "id": model.id,
        "name": model.name,
        "provider": model.provider,
        "parameters": model.parameters,
        "memoryRequired": model.memory_required,
        "latency": model.latency,
        "license": model.license,
        "baseScore": model.score,
        "currentReasoning": model.reasoning,
        "tradeoffs": list(model.tradeoffs),
    }


def build_user_prompt(
    candidates: list[ModelRecommendation],
    warning_model: ModelRecommendation,
    config: RecommendationConfig,
) -> str:
    """User message: description, constraint summary and serialized candidates."""
    payload = [_candidate_payload(m) for m in candidates + [warning_model]]
    return f"""Use case description: "{config.use_case_description}"

Additional constraints:
- Task type: {config.task_type}
- Deployment target: {config.deployment_target}
- Inference framework: {config.inference_framework}
- Quantization: {config.quantization}
- GPU memory: {config.gpu_memory}
- Max latency: {config.max_latency}ms
- License policy: {config.license_type}

Candidate models to re-rank:
{json.dumps(payload, indent=2)}

Return a JSON array with one object per model, ordered from best to worst fit for the described use case:
[
  {{
    "id": "<model id>",
    "fitScore": <0-100 integer, how well this model fits the described use case>,
    "reasoning": "<2-3 sentence explanation specific to the user's use case, practical, not generic>"
  }}
]"""


def parse_rankings(raw_text: str) -> list[LlmRanking]:
    """Parse the model's JSON answer.

    Code fences are stripped first. Entries without an id or a numeric
    fitScore are skipped.

    Raises:
        ValueError: The text is not a JSON array.
    """
    cleaned = _FENCE_RE.sub("", raw_text).strip()
    data = json.loads(cleaned)
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of rankings")

    rankings = []
    for item in data:
        if not isinstance(item, dict) or not isinstance(item.get("id"), str):
            continue
        fit = item.get("fitScore")
        if isinstance(fit, bool) or not isinstance(fit, (int, float)):
            continue
        reasoning = item.get("reasoning")
        rankings.append(
            LlmRanking(
                id=item["id"],
                fit_score=max(0.0, min(100.0, float(fit))),
                reasoning=reasoning if isinstance(reasoning, str) and reasoning.strip() else None,
            )
        )
    return rankings


def blend_score(base_score: float, fit_score: float) -> int:
    """60% catalog score, 40% LLM fit, rounded half up."""
    return int(base_score * BASE_WEIGHT + fit_score * FIT_WEIGHT + 0.5)


def deterministic_result(
    candidates: list[ModelRecommendation],
    warning_model: ModelRecommendation,
) -> RecommendationResult:
    return RecommendationResult(
        primary=candidates[0],
        alternatives=candidates[1:1 + ALTERNATIVE_COUNT],
        warning=warning_model,
    )


def apply_rankings(
    candidates: list[ModelRecommendation],
    warning_model: ModelRecommendation,
    rankings: list[LlmRanking],
) -> RecommendationResult:
    """Blend LLM fit scores into the candidates and re-sort."""
    by_id = {r.id: r for r in rankings}

    blended = []
    for model in candidates:
        ranking = by_id.get(model.id)
        if ranking is None:
            blended.append(model)
            continue
        blended.append(
            model.model_copy(
                update={
                    "score": blend_score(model.score, ranking.fit_score),
                    "reasoning": ranking.reasoning or model.reasoning,
                }
            )
        )
    blended.sort(key=lambda m: m.score, reverse=True)

    warning_ranking = by_id.get(warning_model.id)
    warning = warning_model
    if warning_ranking is not None and warning_ranking.reasoning:
        warning = warning_model.model_copy(update={"reasoning": warning_ranking.reasoning})

    return RecommendationResult(
        primary=blended[0],
        alternatives=blended[1:1 + ALTERNATIVE_COUNT],
        warning=warning,
    )


class LLMReranker:
    """Blends language-model fit scores into a deterministic ranking."""

    def __init__(self, ai_service: IAIService, model: str | None = None):
        self._ai = ai_service
        self._model = model

    @property
    def available(self) -> bool:
        return self._ai.is_available()

    async def rerank(
        self,
        candidates: list[ModelRecommendation],
        warning_model: ModelRecommendation,
        config: RecommendationConfig,
    ) -> RecommendationResult:
        """Re-rank candidates for the user's described use case.

        Unparseable responses return the input order unchanged. Errors from
        the AI service itself propagate to the caller.
        """
        response = await self._ai.chat(
            [ChatMessage(role="user", content=build_user_prompt(candidates, warning_model, config))],
            ChatOptions(
                model=self._model,
                temperature=0.0,
                max_tokens=1024,
                system_prompt=SYSTEM_PROMPT,
            ),
        )

        try:
            rankings = parse_rankings(response.content)
        except ValueError:
            logger.error("Failed to parse LLM rerank response, using original order")
            return deterministic_result(candidates, warning_model)

        return apply_rankings(candidates, warning_model, rankings)
