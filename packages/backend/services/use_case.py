"""Use-case signal matcher.

Turns the user's free-text description into a ranking bonus. Each rule
pairs trigger keywords (case-insensitive whole words or phrases, a plural
"s" allowed) with a predicate over the candidate; when both hold the
rule's weight is added. Naming a model outright adds a flat bonus once.
The total is capped so a description can reorder close candidates but not
override the constraints.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from core.schemas import ModelRecommendation

from .model_metrics import is_permissive_license, parse_latency_ms, parse_memory_gb

MAX_BONUS = 25.0
NAME_MATCH_BONUS = 15.0
MIN_NAME_LENGTH = 3


@dataclass(frozen=True)
class UseCaseRule:
    """A keyword cluster and the kind of model it favours."""

    name: str
    keywords: tuple[str, ...]
    predicate: Callable[[ModelRecommendation], bool]
    weight: float

    def triggered_by(self, description: str) -> bool:
        return any(
            re.search(rf"\b{re.escape(keyword)}s?\b", description)
            for keyword in self.keywords
        )


def _haystack(model: ModelRecommendation) -> str:
    return f"{model.id} {model.name}".lower()


def _mentions(*fragments: str) -> Callable[[ModelRecommendation], bool]:
    def predicate(model: ModelRecommendation) -> bool:
        text = _haystack(model)
        return any(fragment in text for fragment in fragments)

    return predicate


def _param_billions(model: ModelRecommendation) -> float:
    text = model.parameters.strip().upper()
    try:
        if text.endswith("B"):
            return float(text[:-1])
        if text.endswith("M"):
            return float(text[:-1]) / 1000
        if text.endswith("K"):
            return float(text[:-1]) / 1_000_000
    except ValueError:
        pass
    return 0.0


USE_CASE_RULES: list[UseCaseRule] = [
    UseCaseRule(
        name="edge",
        keywords=(
            "edge device", "edge deployment", "the edge", "mobile", "phone",
            "lightweight", "embedded", "raspberry", "on-device", "offline",
            "iot device", "laptop",
        ),
        predicate=lambda m: parse_memory_gb(m.memory_required) <= 4,
        weight=12,
    ),
    UseCaseRule(
        name="code",
        keywords=(
            "code", "coding", "programming", "developer", "autocomplete",
            "copilot", "refactor", "software",
        ),
        predicate=_mentions("code", "coder", "starcoder", "codegen"),
        weight=12,
    ),
    UseCaseRule(
        name="commercial",
        keywords=(
            "commercial", "enterprise", "business", "startup", "saas",
            "customer", "product", "monetize", "monetization",
        ),
        predicate=lambda m: is_permissive_license(m.license),
        weight=10,
    ),
    UseCaseRule(
        name="retrieval",
        keywords=(
            "search", "retrieval", "semantic", "similarity", "vector",
            "rag pipeline", "rag system", "recommendation",
        ),
        predicate=_mentions("bge", "e5", "gte", "minilm", "embed", "sentence"),
        weight=10,
    ),
    UseCaseRule(
        name="realtime",
        keywords=(
            "real-time", "realtime", "real time", "low latency", "instant",
            "interactive", "chatbot", "live",
        ),
        predicate=lambda m: parse_latency_ms(m.latency) <= 20,
        weight=8,
    ),
    UseCaseRule(
        name="multilingual",
        keywords=(
            "multilingual", "translation", "translate", "languages",
            "non-english", "international", "localization",
        ),
        predicate=_mentions("e5", "xlm", "multilingual", "bge-m3", "mt5", "llama", "mistral"),
        weight=8,
    ),
    UseCaseRule(
        name="quality",
        keywords=(
            "accuracy", "accurate", "high quality", "complex reasoning",
            "precise", "state-of-the-art", "best possible",
        ),
        predicate=lambda m: m.score >= 90,
        weight=8,
    ),
    UseCaseRule(
        name="long-form",
        keywords=(
            "long document", "long-form", "long context", "lengthy", "books",
            "reports", "contracts", "papers",
        ),
        predicate=lambda m: _param_billions(m) >= 3,
        weight=6,
    ),
    UseCaseRule(
        name="throughput",
        keywords=(
            "high throughput", "high-throughput", "batch", "batches", "millions",
            "high volume", "bulk", "at scale",
        ),
        predicate=lambda m: parse_latency_ms(m.latency) <= 5,
        weight=6,
    ),
]


def matched_rules(description: str) -> list[UseCaseRule]:
    """Rules whose keywords appear in the description, in rule order."""
    text = description.strip().lower()
    if not text:
        return []
    return [rule for rule in USE_CASE_RULES if rule.triggered_by(text)]


def _names_model(text: str, model: ModelRecommendation) -> bool:
    for candidate in (model.name, model.provider, model.id):
        candidate = candidate.strip().lower()
        if len(candidate) >= MIN_NAME_LENGTH and candidate in text:
            return True
    return False


def use_case_bonus(
    description: str,
    model: ModelRecommendation,
    rules: list[UseCaseRule] | None = None,
) -> float:
    """Bonus points for a candidate given a use-case description.

    Args:
        description: Free text from the user; blank means no bonus
        model: Candidate to score
        rules: Pre-matched rules, to avoid rescanning the description per candidate

    Returns:
        Bonus between 0 and MAX_BONUS
    """
    text = description.strip().lower()
    if not text:
        return 0.0

    active = matched_rules(text) if rules is None else rules
    bonus = sum(rule.weight for rule in active if rule.predicate(model))

    if _names_model(text, model):
        bonus += NAME_MATCH_BONUS

    return min(bonus, MAX_BONUS)
