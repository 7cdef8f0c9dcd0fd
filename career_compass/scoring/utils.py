"""
Scoring Utilities - Career Compass
career_compass/scoring/utils.py

Clamping, half-up rounding and whole-number percentage splits shared by the
per-instrument scorers.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Mapping, Sequence, TypeVar

N = TypeVar("N", int, float, Decimal)


def clamp(value: N, min_val: N, max_val: N) -> N:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def round_half_up(value: float, places: int = 0) -> Decimal:
    """Round like a person would (2.5 -> 3), not banker's rounding."""
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )


def to_percentages(tallies: Mapping[str, float], order: Sequence[str]) -> Dict[str, int]:
    """
    Convert raw tallies into whole percentages that sum to exactly 100.

    Uses largest-remainder apportionment: floor every exact share, then hand the
    leftover points to the largest fractional parts (ties go to the key that
    comes first in ``order``). Negative and non-finite tallies count as zero.
    When every tally is zero the split is uniform, e.g. six keys -> 17, 17, 17,
    17, 16, 16.
    """
    if not order:
        return {}
    weights = [float(tallies.get(key, 0)) for key in order]
    weights = [w if math.isfinite(w) and w > 0 else 0.0 for w in weights]
    total = sum(weights)
    if not math.isfinite(total):
        # finite tallies whose sum overflows; scale them down first
        peak = max(weights)
        weights = [w / peak for w in weights]
        total = sum(weights)
    if total <= 0:
        weights = [1.0] * len(order)
        total = float(len(order))

    exact = [w * 100.0 / total for w in weights]
    floors: List[int] = [int(e) for e in exact]
    leftover = 100 - sum(floors)
    by_remainder = sorted(
        range(len(order)), key=lambda idx: (-(exact[idx] - floors[idx]), idx)
    )
    for idx in by_remainder[:leftover]:
        floors[idx] += 1
    return {key: floors[idx] for idx, key in enumerate(order)}


def top_keys(scores: Mapping[str, float], order: Sequence[str], count: int) -> List[str]:
    """Highest-scoring keys, ties broken by position in ``order``."""
    ranked = sorted(order, key=lambda key: (-scores.get(key, 0), order.index(key)))
    return ranked[:count]
