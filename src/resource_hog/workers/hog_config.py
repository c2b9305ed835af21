"""Hog configuration parsing.

Turns untyped request parameters into a safe, immutable HogConfiguration.
Parsing never fails: bad input falls back to defaults, numbers are clamped.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from resource_hog.constants import (
    HOG_MAX_MEMORY_MB,
    HOG_MIN_MEMORY_MB,
    HOG_DEFAULT_MEMORY_MB,
    HOG_MAX_CPU_SLICE_MS,
    HOG_MIN_CPU_SLICE_MS,
    HOG_DEFAULT_CPU_SLICE_MS,
    HOG_MAX_MINUTES,
    HOG_MIN_MINUTES,
    HOG_DEFAULT_MINUTES,
    HOG_MAX_INTENSITY,
    HOG_MIN_INTENSITY,
    HOG_DEFAULT_INTENSITY,
)

# Leading integer of a string, e.g. " 12abc" -> 12, "7.9" -> 7
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class HogConfiguration:
    """Configuration for a single load generator run."""

    memory_mb: int = HOG_DEFAULT_MEMORY_MB
    cpu_slice_ms: int = HOG_DEFAULT_CPU_SLICE_MS
    max_minutes: int = HOG_DEFAULT_MINUTES
    intensity_multiplier: int = HOG_DEFAULT_INTENSITY

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for JSON serialization."""
        return {
            "memoryMb": self.memory_mb,
            "cpuSliceMs": self.cpu_slice_ms,
            "maxMinutes": self.max_minutes,
            "intensityMultiplier": self.intensity_multiplier,
        }


def _to_int(value: Any) -> Optional[int]:
    """Read an integer from an untyped value, or None if it has none."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, (str, bytes)):
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="ignore")
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return None


def _clamp_field(raw: Mapping[str, Any], key: str, default: int, low: int, high: int) -> int:
    value = _to_int(raw.get(key))
    if value is None:
        return default
    return max(low, min(high, value))


def parse_config(raw: Optional[Mapping[str, Any]]) -> HogConfiguration:
    """Parse and clamp hog configuration from request parameters.

    Args:
        raw: Untyped parameters (query args, JSON body) keyed by the wire
            names memoryMb, cpuSliceMs, maxMinutes, intensityMultiplier.

    Returns:
        HogConfiguration with every field inside its bounds
    """
    if not isinstance(raw, Mapping):
        raw = {}

    return HogConfiguration(
        memory_mb=_clamp_field(
            raw, "memoryMb", HOG_DEFAULT_MEMORY_MB, HOG_MIN_MEMORY_MB, HOG_MAX_MEMORY_MB
        ),
        cpu_slice_ms=_clamp_field(
            raw, "cpuSliceMs", HOG_DEFAULT_CPU_SLICE_MS, HOG_MIN_CPU_SLICE_MS, HOG_MAX_CPU_SLICE_MS
        ),
        max_minutes=_clamp_field(
            raw, "maxMinutes", HOG_DEFAULT_MINUTES, HOG_MIN_MINUTES, HOG_MAX_MINUTES
        ),
        intensity_multiplier=_clamp_field(
            raw, "intensityMultiplier", HOG_DEFAULT_INTENSITY, HOG_MIN_INTENSITY, HOG_MAX_INTENSITY
        ),
    )
