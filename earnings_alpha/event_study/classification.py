"""
Earnings Surprise Classification.
"""
from .constants import BEAT, MEET, MISS, BEAT_THRESHOLD, MISS_THRESHOLD


def surprise_percentage(eps_estimate: float, actual_eps: float) -> float:
    """
    Percentage deviation of actual EPS from the analyst estimate.

    Defined as 0.0 when the estimate is exactly zero.
    """
    if eps_estimate != 0:
        return (actual_eps - eps_estimate) / abs(eps_estimate) * 100.0
    return 0.0


def classify_surprise(surprise_pct: float) -> str:
    """Map a surprise percentage to Beat, Meet or Miss."""
    if surprise_pct > BEAT_THRESHOLD:
        return BEAT
    elif surprise_pct < MISS_THRESHOLD:
        return MISS
    return MEET
