"""Derived metadata and scoring for models fetched from the Hugging Face Hub.

Hub listings carry popularity and recency signals but no curated
descriptions, so parameter counts, memory/latency estimates, a 0-100 score
and the reasoning/tradeoff strings are all derived here.

Scores are batch-relative: popularity, likes and size are normalized
against the largest values in the same fetch, so a model can score
differently depending on what else was returned alongside it.
"""

import math
import re
from datetime import datetime, timezone
from typing import Any

# Assumed age when lastModified is missing or unparseable
DEFAULT_AGE_DAYS = 90.0

POPULARITY_POINTS = 30
RECENCY_POINTS = 20
LIKES_POINTS = 10
SIZE_POINTS = 25
DEFAULT_LICENSE_POINTS = 5

LICENSE_SCORES: dict[str, int] = {
    "Apache 2.0": 15,
    "MIT": 15,
    "CC BY 4.0": 12,
    "CC BY-SA 4.0": 10,
    "OpenRAIL": 10,
}

LICENSE_LABELS: dict[str, str] = {
    "apache-2.0": "Apache 2.0",
    "mit": "MIT",
    "cc-by-4.0": "CC BY 4.0",
    "cc-by-sa-4.0": "CC BY-SA 4.0",
    "openrail": "OpenRAIL",
}

PERMISSIVE_LABELS = ("Apache 2.0", "MIT")

# Checked in order; more specific fragments come before the generic ones.
ARCHITECTURE_PARAMS: list[tuple[tuple[str, ...], float]] = [
    (("distilbert",), 66e6),
    (("roberta-large", "xlm-roberta-large"), 355e6),
    (("roberta-base", "xlm-roberta-base"), 125e6),
    (("deberta-v3-large", "deberta-large"), 304e6),
    (("deberta-v3-base", "deberta-base"), 86e6),
    (("bert-large",), 340e6),
    (("bert-base",), 110e6),
    (("albert-base",), 12e6),
    (("albert-large",), 18e6),
    (("electra-large",), 335e6),
    (("electra-base",), 110e6),
    (("bart-large",), 406e6),
    (("bart-base",), 139e6),
    (("t5-large",), 770e6),
    (("t5-base",), 220e6),
    (("t5-small",), 60e6),
    (("flan-t5",), 250e6),
    (("e5-large",), 335e6),
    (("e5-base",), 110e6),
    (("bge-large",), 335e6),
    (("bge-base",), 110e6),
    (("minilm",), 33e6),
    (("sentence-transformers",), 110e6),
]

_BILLIONS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*b(?:illion)?(?:\b|[-_])")
_MILLIONS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*m(?:illion)?(?:\b|[-_])")


# ── Parameter count resolution ─────────────────────────────────────────

def params_from_safetensors(raw: dict[str, Any]) -> float | None:
    """Read the parameter count from safetensors metadata, if present."""
    safetensors = raw.get("safetensors") or {}
    total = safetensors.get("total")
    if total:
        return float(total)
    per_dtype = safetensors.get("parameters") or {}
    values = [v for v in per_dtype.values() if isinstance(v, (int, float))]
    if values:
        return float(max(values))
    return None


def params_from_name(model_id: str) -> float | None:
    """Parse a size suffix such as ``7B``, ``1.5b`` or ``350M`` from a model id."""
    name = model_id.lower()
    match = _BILLIONS_RE.search(name)
    if match:
        return float(match.group(1)) * 1e9
    match = _MILLIONS_RE.search(name)
    if match:
        return float(match.group(1)) * 1e6
    return None


def params_from_architecture(model_id: str, tags: list[str]) -> float | None:
    """Approximate the size from well-known architecture names."""
    combined = f"{model_id} {' '.join(tags)}".lower()
    for fragments, count in ARCHITECTURE_PARAMS:
        if any(fragment in combined for fragment in fragments):
            return count
    return None


def resolve_param_count(raw: dict[str, Any]) -> float | None:
    """Resolve a parameter count: safetensors, then the id, then the architecture table."""
    model_id = raw.get("modelId") or raw.get("id") or ""
    tags = raw.get("tags") or []
    return (
        params_from_safetensors(raw)
        or params_from_name(model_id)
        or params_from_architecture(model_id, tags)
    )


# ── Display estimates ──────────────────────────────────────────────────

def format_params(count: float) -> str:
    """Format a raw count as ``7B``, ``1.5B``, ``335M`` or ``900K``."""
    if count >= 1e9:
        value = count / 1e9
        return f"{int(value)}B" if value.is_integer() else f"{value:.1f}B"
    if count >= 1e6:
        value = count / 1e6
        return f"{int(value)}M" if value.is_integer() else f"{value:.0f}M"
    return f"{round(count / 1e3)}K"


def estimate_memory(count: float) -> str:
    """Estimate fp16 inference memory (2 bytes per parameter)."""
    gb = count * 2 / (1024 ** 3)
    if gb < 1:
        return f"{round(gb * 1024)} MB"
    return f"{gb:.1f} GB" if gb < 10 else f"{round(gb)} GB"


def estimate_latency(count: float) -> str:
    """Rough per-token latency band by model size."""
    billions = count / 1e9
    if billions >= 30:
        return "~100ms/token"
    if billions >= 10:
        return "~60ms/token"
    if billions >= 3:
        return "~40ms/token"
    if billions >= 1:
        return "~30ms/token"
    return "~5ms"


def extract_license(tags: list[str]) -> str:
    """Return a display license from the ``license:`` tag."""
    for tag in tags:
        if tag.startswith("license:"):
            raw = tag[len("license:"):]
            return LICENSE_LABELS.get(raw, raw)
    return "Unknown"


def days_since_update(last_modified: Any, now: datetime) -> float:
    """Days between ``last_modified`` (ISO 8601) and ``now``."""
    if not last_modified or not isinstance(last_modified, str):
        return DEFAULT_AGE_DAYS
    try:
        modified = datetime.fromisoformat(last_modified.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return DEFAULT_AGE_DAYS
    if modified.tzinfo is None:
        modified = modified.replace(tzinfo=timezone.utc)
    return (now - modified).total_seconds() / 86400


# ── Scoring ────────────────────────────────────────────────────────────

def _log_share(value: float, batch_max: float) -> float:
    if batch_max <= 0:
        return 0.0
    return math.log1p(max(value, 0)) / math.log1p(batch_max)


def recency_points(days: float) -> float:
    """Full points within 30 days, linear decay to zero at 180 days."""
    if days <= 30:
        return float(RECENCY_POINTS)
    return max(0.0, RECENCY_POINTS * (1 - (days - 30) / 150))


def score_hub_model(
    downloads: float,
    likes: float,
    days: float,
    license_label: str,
    param_count: float,
    max_downloads: float,
    max_likes: float,
    max_params: float,
    min_params: float,
) -> int:
    """Weighted 0-100 score for one model within its fetched batch.

    A batch with no size spread gives every model the size midpoint. Totals
    round half up.
    """
    popularity = _log_share(downloads, max_downloads) * POPULARITY_POINTS
    recency = recency_points(days)
    license_points = LICENSE_SCORES.get(license_label, DEFAULT_LICENSE_POINTS)
    community = _log_share(likes, max_likes) * LIKES_POINTS
    if max_params <= 0 or max_params == min_params:
        size = SIZE_POINTS / 2
    else:
        size = (1 - param_count / max_params) * SIZE_POINTS

    return int(popularity + recency + license_points + community + size + 0.5)


# ── Explanations ───────────────────────────────────────────────────────

def generate_reasoning(downloads: float, days: float, license_label: str, param_count: float) -> str:
    """Summarize why a Hub model made the list."""
    parts: list[str] = []
    if downloads >= 1_000_000:
        parts.append(f"Highly popular with {downloads / 1e6:.1f}M+ downloads")
    elif downloads >= 100_000:
        parts.append(f"Well-adopted with {downloads / 1e3:.0f}K+ downloads")
    if days <= 60:
        parts.append("Recently updated")
    if license_label in PERMISSIVE_LABELS:
        parts.append(f"Permissive {license_label} license")
    if param_count < 1e9:
        parts.append("Lightweight and efficient")
    elif param_count > 30e9:
        parts.append("Large model with strong capabilities")

    if not parts:
        return "Community model from Hugging Face Hub."
    return ". ".join(parts) + "."


def generate_tradeoffs(
    param_count: float,
    license_label: str,
    days: float,
    downloads: float,
    likes: float,
    model_id: str,
) -> list[str]:
    """Up to three caveats, ordered size, license, recency, adoption, architecture."""
    tradeoffs: list[str] = []
    lower = model_id.lower()

    if param_count >= 30e9:
        tradeoffs.append("Requires multi-GPU or offloading for inference")
    elif param_count >= 13e9:
        tradeoffs.append("Needs a high-VRAM GPU (16 GB+) for full-precision inference")
    elif param_count >= 3e9:
        tradeoffs.append("Mid-size model, may underperform larger alternatives on complex reasoning")
    elif param_count >= 500e6:
        tradeoffs.append("Compact model, faster inference but limited on nuanced tasks")
    else:
        tradeoffs.append("Very small model, best for narrow or well-defined tasks")

    if license_label == "Unknown":
        tradeoffs.append("License not specified, verify terms before use")
    elif license_label not in PERMISSIVE_LABELS:
        tradeoffs.append("Review license terms before commercial deployment")

    if days > 365:
        tradeoffs.append("Over a year since last update, may lack recent improvements")
    elif days > 180:
        tradeoffs.append("Not recently maintained, verify compatibility with current tooling")
    elif days <= 14:
        tradeoffs.append("Very recently published, less battle-tested in production")

    if downloads < 10_000:
        tradeoffs.append("Low download count, limited community validation")
    elif downloads < 100_000 and likes < 50:
        tradeoffs.append("Modest community adoption, fewer real-world usage reports")

    if "distil" in lower:
        tradeoffs.append("Distilled variant, trades some accuracy for speed")
    if any(fmt in lower for fmt in ("gptq", "awq", "gguf")):
        tradeoffs.append("Pre-quantized weights, slight quality loss vs. full precision")

    return tradeoffs[:3]
