"""
Return Series Calculations.

Simple daily returns from adjusted-close prices and benchmark-adjusted
(abnormal) returns.
"""
import numpy as np
from typing import Sequence


def calculate_returns(prices: Sequence[float]) -> np.ndarray:
    """
    Convert a chronological price series into simple daily returns.

    R_t = (P_{t+1} - P_t) / P_t

    A zero price produces a non-finite return (inf or nan) which is left in
    place for downstream code to carry.

    Args:
        prices: Adjusted-close prices, earliest first

    Returns:
        Array of length max(n - 1, 0)
    """
    p = np.asarray(prices, dtype=float)
    if p.size < 2:
        return np.empty(0, dtype=float)

    with np.errstate(divide='ignore', invalid='ignore'):
        return (p[1:] - p[:-1]) / p[:-1]


def calculate_abnormal_returns(
    stock_returns: Sequence[float],
    benchmark_returns: Sequence[float]
) -> np.ndarray:
    """
    Subtract benchmark returns from stock returns, index by index.

    AR_t = R_t - R_m,t

    Series of different length are truncated to the shorter one.
    """
    r = np.asarray(stock_returns, dtype=float)
    m = np.asarray(benchmark_returns, dtype=float)
    n = min(r.size, m.size)

    with np.errstate(invalid='ignore'):
        return r[:n] - m[:n]
