import math
import uuid
from typing import Any, Iterable, List


def clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, x))


def round1(value: float) -> float:
    """Round half-up to one decimal place (0.25 -> 0.3, not 0.2)."""
    return math.floor(float(value) * 10.0 + 0.5) / 10.0


def canonical_id(value: Any) -> str:
    """Lowercase hyphenated form of a UUID id; other ids unchanged."""
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, AttributeError, TypeError):
        return str(value)


def intersect_ordered(required: Iterable[str], available: Iterable[str]) -> List[str]:
    """Items of `required` present in `available`, in `required` order."""
    available_set = set(available)
    return [item for item in required if item in available_set]
