"""
Event Study Runner: Main Orchestration.

Builds the stock store from earnings records, attaches price data, assigns
surprise groups, and exposes group metrics and the CAAR tables.
"""
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .aggregation import aggregate, event_time_table, to_event_time
from .alignment import align_event_window, PRICE_COLUMN, BENCHMARK_COLUMN
from .bootstrap import BootstrapResult, RandomSource, bootstrap_caar
from .constants import (
    AAR,
    CAAR,
    ANCHOR_OFFSET,
    DAY_COLUMN,
    GROUP_NAMES,
    METRIC_NAMES,
    SUMMARY_WINDOW,
)
from .models import EarningsRecord, Group, Stock, StockUniverse
from .returns import calculate_returns

logger = logging.getLogger(__name__)


class EarningsEventStudy:
    """
    Beat/Meet/Miss event study over a fixed set of earnings records.

    All inputs are passed in explicitly; the study performs no I/O.
    """

    def __init__(self, records: Iterable[EarningsRecord], anchor_offset: int = ANCHOR_OFFSET):
        self.anchor_offset = anchor_offset
        self.universe = StockUniverse()
        for record in records:
            self.universe.add(record)
        self.groups: Dict[str, Group] = {name: Group(name) for name in GROUP_NAMES}

    @classmethod
    def from_price_series(
        cls,
        records: Iterable[EarningsRecord],
        prices: Mapping[str, Sequence[float]],
        benchmark_prices: Sequence[float],
        anchor_offset: int = ANCHOR_OFFSET
    ) -> 'EarningsEventStudy':
        """
        Build a study where every stock shares one benchmark price series.

        Symbols missing from `prices` stay unclassified.
        """
        study = cls(records, anchor_offset=anchor_offset)
        benchmark_returns = calculate_returns(benchmark_prices)

        for symbol in study.universe.symbols():
            if symbol not in prices:
                logger.warning(f"No price data for {symbol}; left out of all groups.")
                continue
            study.load_prices(symbol, prices[symbol], benchmark_returns=benchmark_returns)

        return study

    def load_prices(
        self,
        symbol: str,
        prices: Sequence[float],
        benchmark_prices: Optional[Sequence[float]] = None,
        benchmark_returns: Optional[Sequence[float]] = None
    ) -> Stock:
        """
        Attach prices to a stock, derive its returns, and assign its group.

        Pass either the benchmark's prices or its precomputed returns.

        Raises:
            ValueError: If the symbol is unknown or its prices were already loaded
        """
        stock = self.universe.get(symbol)
        if stock is None:
            raise ValueError(f"Unknown symbol '{symbol}'.")
        if stock.group is not None:
            raise ValueError(f"Prices for {symbol} are already loaded.")

        if benchmark_returns is None:
            if benchmark_prices is None:
                raise ValueError("Either benchmark_prices or benchmark_returns is required.")
            benchmark_returns = calculate_returns(benchmark_prices)

        stock.set_prices(prices, benchmark_returns)
        group = stock.classify()
        self.groups[group].add(symbol)
        return stock

    # ------------------------------------------------------------------
    # Group metrics
    # ------------------------------------------------------------------

    def get_group(self, name: str) -> Group:
        """Look up a group by name. Raises ValueError for an unknown name."""
        try:
            return self.groups[name]
        except KeyError:
            raise ValueError(
                f"Invalid group name '{name}'. Please choose {', '.join(GROUP_NAMES)}."
            ) from None

    def compute_group(self, name: str) -> Tuple[np.ndarray, np.ndarray]:
        """(AAR, CAAR) for a group, recomputed from current member data."""
        group = self.get_group(name)
        members = self.universe.resolve(group.members)
        return aggregate([stock.abnormal_returns for stock in members])

    def group_metrics(self, name: str, metric: str = CAAR) -> pd.Series:
        """
        AAR or CAAR for one group, indexed by event day.

        Raises:
            ValueError: If the group name or metric is not recognized
        """
        if metric not in METRIC_NAMES:
            raise ValueError(f"Invalid metric '{metric}'. Please choose {' or '.join(METRIC_NAMES)}.")

        aar, caar = self.compute_group(name)
        values = aar if metric == AAR else caar
        return to_event_time(values, self.anchor_offset, name=name)

    def caar_table(self) -> pd.DataFrame:
        """Point-estimate CAAR, one column per group."""
        curves = {name: self.compute_group(name)[1] for name in GROUP_NAMES}
        return event_time_table(curves, self.anchor_offset)

    def bootstrap(
        self,
        sample_size: int,
        iterations: int,
        rng: RandomSource = None
    ) -> BootstrapResult:
        """Bootstrapped CAAR over the current groups."""
        return bootstrap_caar(
            self.groups,
            self.universe,
            sample_size=sample_size,
            iterations=iterations,
            rng=rng,
            anchor_offset=self.anchor_offset,
        )

    def group_sizes(self) -> Dict[str, int]:
        return {name: len(group) for name, group in self.groups.items()}

    # ------------------------------------------------------------------
    # Stock display
    # ------------------------------------------------------------------

    def stock_summary(self, symbol: str, window: int = SUMMARY_WINDOW) -> Dict[str, Any]:
        """
        Display fields for one stock.

        Raises:
            ValueError: If the symbol is unknown
        """
        stock = self.universe.get(symbol)
        if stock is None:
            raise ValueError(f"Stock {symbol} not found.")
        return stock_summary(stock, window=window)


def stock_summary(stock: Stock, window: int = SUMMARY_WINDOW) -> Dict[str, Any]:
    """
    Identification fields plus price and abnormal-return windows.

    Windows are centred on the midpoint of the price series, which is T=0 for
    a symmetric event window. Returns have one fewer element than prices, so
    the abnormal-return window is shifted back by one position.
    """
    n_prices = len(stock.prices)
    mid = n_prices // 2

    start = max(0, mid - window)
    end = min(n_prices - 1, mid + window)
    positions = np.arange(start, end + 1)
    price_window = pd.Series(
        stock.prices[start:end + 1],
        index=pd.Index(positions - mid, name=DAY_COLUMN),
        name='price',
        dtype=float,
    )

    n_abnormal = len(stock.abnormal_returns)
    ar_start = max(0, mid - window - 1)
    ar_end = min(n_abnormal - 1, mid + window - 1)
    ar_positions = np.arange(ar_start, ar_end + 1)
    abnormal_window = pd.Series(
        stock.abnormal_returns[ar_start:ar_end + 1],
        index=pd.Index(ar_positions - (mid - 1), name=DAY_COLUMN),
        name='abnormal_return',
        dtype=float,
    )

    return {
        'symbol': stock.symbol,
        'eps_estimate': stock.record.eps_estimate,
        'actual_eps': stock.record.actual_eps,
        'surprise_pct': stock.surprise_pct,
        'group': stock.group,
        'earnings_date': stock.record.earnings_date,
        'prices': price_window,
        'abnormal_returns': abnormal_window,
    }


def run_event_study(
    records: Iterable[EarningsRecord],
    price_histories: Mapping[str, pd.Series],
    benchmark_history: pd.Series,
    pre: int = ANCHOR_OFFSET,
    post: int = ANCHOR_OFFSET
) -> EarningsEventStudy:
    """
    Run the event study on dated price histories.

    Each stock's history is aligned with the benchmark on common trading days
    and cut to [T-pre, T+post] around its earnings date. Day 0 of the
    resulting series is reported as day -pre.

    Args:
        records: Earnings records
        price_histories: Adjusted closes per symbol (indexed by date)
        benchmark_history: Adjusted closes of the benchmark (indexed by date)
        pre: Trading days before the announcement
        post: Trading days after the announcement

    Returns:
        The populated EarningsEventStudy
    """
    logger.info("Starting Event Study Analysis...")

    study = EarningsEventStudy(records, anchor_offset=pre)
    total = len(study.universe)
    logger.info(f"Processing {total} events...")

    for i, stock in enumerate(study.universe):
        if (i + 1) % 100 == 0 or (i + 1) == total:
            logger.info(f"Processing event {i + 1}/{total}...")

        symbol = stock.symbol
        history = price_histories.get(symbol)
        if history is None or history.empty:
            logger.warning(f"No price history for {symbol}; skipped.")
            continue

        window = align_event_window(
            history, benchmark_history, stock.record.earnings_date, pre, post
        )
        if window is None:
            logger.warning(f"Could not align event window for {symbol}; skipped.")
            continue

        study.load_prices(
            symbol,
            window[PRICE_COLUMN].to_numpy(),
            benchmark_prices=window[BENCHMARK_COLUMN].to_numpy(),
        )

    sizes = study.group_sizes()
    logger.info(
        "Event Study Complete. "
        + ", ".join(f"{name}: {count}" for name, count in sizes.items())
    )
    return study
