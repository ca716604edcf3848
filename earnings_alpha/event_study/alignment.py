"""
Event Window Alignment.

Aligns a stock's price history with the benchmark's on common trading days
and cuts the window around the earnings announcement.
"""
import logging
import pandas as pd
from typing import Optional

logger = logging.getLogger(__name__)

PRICE_COLUMN = 'price'
BENCHMARK_COLUMN = 'benchmark'


def align_event_window(
    prices: pd.Series,
    benchmark_prices: pd.Series,
    earnings_date: pd.Timestamp,
    pre: int,
    post: int
) -> Optional[pd.DataFrame]:
    """
    Align stock and benchmark prices and slice [T-pre, T+post].

    T=0 is the first common trading day on or after the earnings date.
    A window running past the end of the history is kept short; a window
    starting before the history begins is rejected.

    Args:
        prices: Adjusted closes for the stock (indexed by date)
        benchmark_prices: Adjusted closes for the benchmark (indexed by date)
        earnings_date: Announcement date
        pre: Trading days before T=0
        post: Trading days after T=0

    Returns:
        DataFrame with 'price' and 'benchmark' columns, chronological,
        or None if T=0 cannot be placed with a full pre-event window
    """
    prices = prices[~prices.index.duplicated(keep='first')]
    benchmark_prices = benchmark_prices[~benchmark_prices.index.duplicated(keep='first')]

    # Inner join keeps only days where both series have a price
    data = pd.concat(
        [prices.rename(PRICE_COLUMN), benchmark_prices.rename(BENCHMARK_COLUMN)],
        axis=1,
        join='inner'
    )
    data = data.dropna().sort_index()

    if data.empty:
        return None

    # If the event date is a non-trading day, T=0 is the next trading day
    t0_loc = data.index.get_indexer([pd.Timestamp(earnings_date)], method='bfill')[0]

    # get_indexer returns -1 when the date is past the end of the data
    if t0_loc == -1:
        logger.warning(f"Earnings date {earnings_date} is beyond the available price history.")
        return None

    start_idx = t0_loc - pre
    if start_idx < 0:
        logger.warning(
            f"Not enough history before {earnings_date}: need {pre} days, have {t0_loc}."
        )
        return None

    end_idx = t0_loc + post + 1
    if end_idx > len(data):
        logger.warning(
            f"Post-event window after {earnings_date} is truncated to {len(data) - t0_loc - 1} days."
        )

    return data.iloc[start_idx:end_idx]
