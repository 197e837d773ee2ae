"""Parsers for the human-readable metric strings on catalog entries."""

import re

DEFAULT_LATENCY_MS = 50

_NUMBER_RE = re.compile(r"[-+]?\d*\.?\d+")
_INTEGER_RE = re.compile(r"(\d+)")


def _leading_float(text: str) -> float | None:
    match = _NUMBER_RE.match(text)
    return float(match.group()) if match else None


def parse_memory_gb(memory: str) -> float:
    """Parse ``"16 GB"``, ``"512 MB"``, ``"8gb"`` or a bare number to gigabytes.

    Unparseable input yields 0.
    """
    normalized = memory.strip().lower()
    value = _leading_float(normalized)
    if value is None:
        return 0.0
    if "mb" in normalized:
        return value / 1024
    return value


def parse_latency_ms(latency: str) -> int:
    """First integer in a latency string (``"~50ms/token"`` -> 50)."""
    match = _INTEGER_RE.search(latency)
    return int(match.group(1)) if match else DEFAULT_LATENCY_MS


def is_permissive_license(license_name: str) -> bool:
    """MIT and Apache licenses count as permissive."""
    normalized = license_name.lower()
    return "mit" in normalized or "apache" in normalized
