"""
Pytest fixtures for Earnings Alpha tests.

Provides sample earnings records, price histories and a mock HTTP session.
"""
import pytest
import pandas as pd
import numpy as np
from unittest.mock import MagicMock

from earnings_alpha.event_study import EarningsRecord


# =============================================================================
# Sample Data Generators
# =============================================================================

def make_record(symbol='AAA', eps_estimate=1.0, actual_eps=1.0, earnings_date='2024-03-15'):
    """Build an EarningsRecord with sensible defaults."""
    return EarningsRecord(
        symbol=symbol,
        eps_estimate=eps_estimate,
        actual_eps=actual_eps,
        earnings_date=pd.Timestamp(earnings_date),
    )


@pytest.fixture
def record_factory():
    """Factory for EarningsRecord objects."""
    return make_record


@pytest.fixture
def sample_records():
    """
    Six records, two per surprise group.
    """
    return [
        make_record('BT1', 1.00, 1.20),   # +20%  Beat
        make_record('BT2', 2.00, 2.50),   # +25%  Beat
        make_record('MT1', 1.00, 1.02),   # +2%   Meet
        make_record('MT2', 0.00, 0.40),   # estimate 0 -> Meet
        make_record('MS1', 1.00, 0.80),   # -20%  Miss
        make_record('MS2', -1.00, -1.50), # -50%  Miss
    ]


@pytest.fixture
def sample_prices():
    """
    Random-walk price series per symbol, 21 prices each except MS2 (16).
    """
    rng = np.random.default_rng(42)
    lengths = {'BT1': 21, 'BT2': 21, 'MT1': 21, 'MT2': 21, 'MS1': 21, 'MS2': 16}
    return {
        symbol: 100 * np.cumprod(1 + rng.normal(0.0005, 0.02, size=n))
        for symbol, n in lengths.items()
    }


@pytest.fixture
def benchmark_prices():
    """Benchmark series growing 0.1% a day, 21 prices."""
    return 400 * 1.001 ** np.arange(21)


@pytest.fixture
def trading_days():
    """120 business days starting 2024-01-01."""
    return pd.bdate_range('2024-01-01', periods=120, name='date')


@pytest.fixture
def benchmark_history(trading_days):
    """Dated benchmark closes."""
    return pd.Series(400 * 1.001 ** np.arange(len(trading_days)), index=trading_days)


@pytest.fixture
def price_histories(trading_days):
    """Dated closes for three symbols with different drifts."""
    n = len(trading_days)
    return {
        'BT1': pd.Series(50 * 1.003 ** np.arange(n), index=trading_days),
        'MT1': pd.Series(80 * 1.001 ** np.arange(n), index=trading_days),
        'MS1': pd.Series(120 * 0.998 ** np.arange(n), index=trading_days),
    }


# =============================================================================
# Mock Fixtures
# =============================================================================

DAILY_CSV = (
    "timestamp,open,high,low,close,adjusted_close,volume,dividend_amount,split_coefficient\n"
    "2024-01-05,103.0,104.0,102.0,103.5,103.5,1000,0.0,1.0\n"
    "2024-01-04,102.0,103.0,101.0,102.5,102.5,1000,0.0,1.0\n"
    "2024-01-03,101.0,102.0,100.0,101.5,101.5,1000,0.0,1.0\n"
    "2024-01-02,100.0,101.0,99.0,100.5,100.5,1000,0.0,1.0\n"
)


@pytest.fixture
def daily_csv():
    """Alpha Vantage style daily CSV, most recent day first."""
    return DAILY_CSV


@pytest.fixture
def mock_session(daily_csv):
    """Mock requests.Session returning the sample CSV."""
    session = MagicMock()
    response = MagicMock()
    response.text = daily_csv
    response.raise_for_status.return_value = None
    session.get.return_value = response
    return session
