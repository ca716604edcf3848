"""
Cross-Sectional Aggregation: AAR and CAAR.

AAR_d  = (1/N) * Sum_i AR_i,d
CAAR_d = Sum_{k<=d} AAR_k
"""
import numpy as np
import pandas as pd
from typing import Mapping, Optional, Sequence, Tuple

from .constants import ANCHOR_OFFSET, DAY_COLUMN


def calculate_aar(abnormal_returns: Sequence[np.ndarray]) -> np.ndarray:
    """
    Average abnormal return per day across a set of stocks.

    The series are truncated to the shortest member, so every day in the
    result is averaged over all members.

    Args:
        abnormal_returns: One abnormal return series per stock

    Returns:
        Array of length min(len(series)), empty for an empty set
    """
    if len(abnormal_returns) == 0:
        return np.empty(0, dtype=float)

    n_days = min(len(ar) for ar in abnormal_returns)
    total = np.zeros(n_days, dtype=float)

    # Members summed in order so repeated calls are bit-for-bit identical
    with np.errstate(invalid='ignore'):
        for ar in abnormal_returns:
            total += np.asarray(ar, dtype=float)[:n_days]

    return total / len(abnormal_returns)


def calculate_caar(aar: Sequence[float]) -> np.ndarray:
    """Running cumulative sum of AAR."""
    with np.errstate(invalid='ignore'):
        return np.cumsum(np.asarray(aar, dtype=float))


def aggregate(abnormal_returns: Sequence[np.ndarray]) -> Tuple[np.ndarray, np.ndarray]:
    """Return (AAR, CAAR) for a set of abnormal return series."""
    aar = calculate_aar(abnormal_returns)
    return aar, calculate_caar(aar)


def to_event_time(
    values: Sequence[float],
    anchor_offset: int = ANCHOR_OFFSET,
    name: Optional[str] = None
) -> pd.Series:
    """
    Index a day-ordered sequence by event-relative day.

    Position 0 maps to day -anchor_offset.
    """
    values = np.asarray(values, dtype=float)
    index = pd.Index(np.arange(len(values)) - anchor_offset, name=DAY_COLUMN)
    return pd.Series(values, index=index, name=name, dtype=float)


def event_time_table(
    curves: Mapping[str, Sequence[float]],
    anchor_offset: int = ANCHOR_OFFSET
) -> pd.DataFrame:
    """
    Combine per-group curves into one day-indexed table, one column per group.

    Groups with shorter curves are padded with NaN.
    """
    columns = {
        name: to_event_time(values, anchor_offset, name=name)
        for name, values in curves.items()
    }
    table = pd.DataFrame(columns, columns=list(curves))
    table.index.name = DAY_COLUMN
    return table
