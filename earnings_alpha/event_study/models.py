"""
Data Model for the Earnings Event Study.

Stocks live in a single keyed store (StockUniverse). Groups reference stocks
by symbol and never own them.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

import numpy as np
import pandas as pd

from .classification import surprise_percentage, classify_surprise
from .returns import calculate_returns, calculate_abnormal_returns

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EarningsRecord:
    """One earnings announcement as loaded from the records file."""

    symbol: str
    eps_estimate: float
    actual_eps: float
    earnings_date: pd.Timestamp


@dataclass
class Stock:
    """
    A stock under study.

    Market fields stay empty until prices arrive. The group label is set
    once by classify() and cannot be reassigned.
    """

    record: EarningsRecord
    prices: np.ndarray = field(default_factory=lambda: np.empty(0))
    returns: np.ndarray = field(default_factory=lambda: np.empty(0))
    abnormal_returns: np.ndarray = field(default_factory=lambda: np.empty(0))
    group: Optional[str] = None

    @property
    def symbol(self) -> str:
        return self.record.symbol

    @property
    def surprise_pct(self) -> float:
        return surprise_percentage(self.record.eps_estimate, self.record.actual_eps)

    def set_prices(self, prices: Sequence[float], benchmark_returns: Sequence[float]) -> None:
        """Store the price series and derive returns and abnormal returns."""
        self.prices = np.asarray(prices, dtype=float)
        self.returns = calculate_returns(self.prices)
        self.abnormal_returns = calculate_abnormal_returns(self.returns, benchmark_returns)

    def classify(self) -> str:
        """Assign the surprise group. Raises ValueError on a second call."""
        if self.group is not None:
            raise ValueError(f"Stock {self.symbol} is already classified as {self.group}.")
        self.group = classify_surprise(self.surprise_pct)
        return self.group


class StockUniverse:
    """
    Keyed store of stocks, in insertion order.

    Groups hold symbols into this store, so membership stays valid however
    the store itself changes.
    """

    def __init__(self) -> None:
        self._stocks: Dict[str, Stock] = {}

    def add(self, record: EarningsRecord) -> Optional[Stock]:
        """Create a stock for the record. A duplicate symbol is ignored."""
        if record.symbol in self._stocks:
            logger.warning(f"Duplicate earnings record for {record.symbol}; keeping the first.")
            return None
        stock = Stock(record=record)
        self._stocks[record.symbol] = stock
        return stock

    def get(self, symbol: str) -> Optional[Stock]:
        return self._stocks.get(symbol)

    def __getitem__(self, symbol: str) -> Stock:
        return self._stocks[symbol]

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._stocks

    def __iter__(self) -> Iterator[Stock]:
        return iter(self._stocks.values())

    def __len__(self) -> int:
        return len(self._stocks)

    def symbols(self) -> List[str]:
        return list(self._stocks)

    def resolve(self, symbols: Sequence[str]) -> List[Stock]:
        """Look up stocks for a list of symbols, preserving order."""
        return [self._stocks[s] for s in symbols]


@dataclass
class Group:
    """A surprise group: a name and the symbols of its members."""

    name: str
    members: List[str] = field(default_factory=list)

    def add(self, symbol: str) -> None:
        self.members.append(symbol)

    def __len__(self) -> int:
        return len(self.members)
