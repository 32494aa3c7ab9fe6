"""Resource parsing utilities for CPU and memory values.

Telemetry and deployment records report quantities inconsistently:
- CPU: either a fraction (0.42) or a percentage (42.0)
- Memory: megabytes, kilobytes or bytes, depending on the source
- Memory limits: numbers or strings such as "2 GB", "512MB", "0.5 GB memory"

The helpers here convert them to percentages and megabytes.
"""

from __future__ import annotations

import math
import re
from typing import Any

_KIB: int = 1024
_MIB: int = 1024 * 1024

_MEMORY_WITH_UNIT_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(GB|MB)\b", re.IGNORECASE)


def _is_number(value: Any) -> bool:
    """Return True for finite real numbers, excluding bools."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def round_half_up(value: float) -> int:
    """Round halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def normalize_cpu_value(value: Any) -> float | None:
    """Normalize a CPU reading to a percentage in [0, 100].

    Values <= 1 are treated as fractions and multiplied by 100.

    Args:
        value: Raw CPU reading.

    Returns:
        CPU percentage, or None when the value is not a number.
    """
    if not _is_number(value):
        return None
    normalized = value * 100 if value <= 1 else value
    return float(max(0.0, min(100.0, normalized)))


def normalize_memory_value(value: Any) -> float | None:
    """Normalize a memory reading to megabytes.

    Values above 1024*1024 are treated as bytes, values above 1024 as
    kilobytes, anything else as megabytes already.

    Args:
        value: Raw memory reading.

    Returns:
        Memory in MB, or None when the value is not a number.
    """
    if not _is_number(value):
        return None
    if value > _MIB:
        return value / _MIB
    if value > _KIB:
        return value / _KIB
    return float(value)


def parse_memory_limit_from_string(value: str) -> int | None:
    """Parse a memory limit string into whole megabytes.

    Handles:
    - "2 GB" -> 2048
    - "512MB" -> 512
    - "0.2 GB memory" -> 205
    - "1536" -> 1536

    Args:
        value: Memory limit as string.

    Returns:
        Memory limit in MB, or None when nothing numeric can be parsed.
    """
    match = _MEMORY_WITH_UNIT_RE.search(value)
    if match is None:
        try:
            numeric = float(value.strip())
        except ValueError:
            return None
        if not math.isfinite(numeric):
            return None
        return round_half_up(numeric)

    amount = float(match.group(1))
    if match.group(2).upper() == "GB":
        return round_half_up(amount * 1024)
    return round_half_up(amount)


def parse_memory_limit_mb(value: Any) -> int | None:
    """Parse a structured memory limit field into whole megabytes.

    Numbers go through normalize_memory_value(); strings through
    parse_memory_limit_from_string(). Any other type yields None.
    """
    if _is_number(value):
        normalized = normalize_memory_value(value)
        return round_half_up(normalized) if normalized is not None else None
    if isinstance(value, str):
        return parse_memory_limit_from_string(value)
    return None


def get_nested(data: Any, *path: str | int) -> Any:
    """Walk a nested dict/list structure, returning None on any miss."""
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
            current = current[key]
            continue
        if not isinstance(current, dict):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def first_present(*candidates: Any) -> Any:
    """Return the first truthy candidate, or None."""
    for candidate in candidates:
        if candidate:
            return candidate
    return None
