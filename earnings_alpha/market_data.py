"""
Market Data Client: Alpha Vantage daily adjusted prices.
"""
from io import StringIO
from typing import Optional

import pandas as pd
import requests

from . import config, log

logger = log.logger

PRICE_COLUMNS = ['date', 'adjusted_close']


class MarketDataError(RuntimeError):
    """The provider returned no usable price data."""


# ---------------------------------------------------------------------
# HTTP Session
# ---------------------------------------------------------------------

def get_session() -> requests.Session:
    """
    Get an HTTP session for the market data provider.
    """
    if not config.ALPHA_VANTAGE_API_KEY:
        logger.warning("ALPHA_VANTAGE_API_KEY not found in environment. Requests will likely be rejected.")

    session = requests.Session()
    session.headers.update({"User-Agent": "earnings-alpha/0.1"})
    return session

# ---------------------------------------------------------------------
# Fetchers
# ---------------------------------------------------------------------

def fetch_daily_adjusted(
    session: requests.Session,
    symbol: str,
    api_key: Optional[str] = None,
    outputsize: str = "full"
) -> pd.DataFrame:
    """
    Fetch the daily adjusted price history for a symbol.

    Returns:
        DataFrame with 'date' and 'adjusted_close', earliest first

    Raises:
        MarketDataError: If the provider responds with an error payload
        requests.HTTPError: On a non-2xx response
    """
    if api_key is None:
        api_key = config.ALPHA_VANTAGE_API_KEY

    params = {
        "function": config.ALPHA_VANTAGE_FUNCTION,
        "symbol": symbol,
        "outputsize": outputsize,
        "datatype": "csv",
        "apikey": api_key,
    }

    logger.info(f"Retrieving daily prices for {symbol}...")
    response = session.get(config.ALPHA_VANTAGE_URL, params=params, timeout=config.REQUEST_TIMEOUT_SECONDS)
    response.raise_for_status()

    return parse_daily_csv(response.text, symbol)


def parse_daily_csv(text: str, symbol: str) -> pd.DataFrame:
    """
    Parse an Alpha Vantage daily CSV into chronological adjusted closes.

    The provider lists the most recent day first; the result is reversed.
    Rows whose adjusted close cannot be parsed are dropped.
    """
    # Errors and rate-limit notices come back as JSON even when CSV was requested
    if text.lstrip().startswith("{"):
        raise MarketDataError(f"Provider error for {symbol}: {text.strip()[:200]}")

    df = pd.read_csv(StringIO(text))
    if 'adjusted_close' not in df.columns or 'timestamp' not in df.columns:
        raise MarketDataError(f"Unexpected price columns for {symbol}: {list(df.columns)}")

    df['date'] = pd.to_datetime(df['timestamp'], errors='coerce')
    df['adjusted_close'] = pd.to_numeric(df['adjusted_close'], errors='coerce')

    bad = df[PRICE_COLUMNS].isna().any(axis=1)
    if bad.any():
        logger.warning(f"Dropped {int(bad.sum())} unparseable price rows for {symbol}.")
        df = df[~bad]

    return (
        df[PRICE_COLUMNS]
        .sort_values('date')
        .reset_index(drop=True)
    )


def to_price_series(df: pd.DataFrame) -> pd.Series:
    """Adjusted closes indexed by date."""
    if df.empty:
        return pd.Series(dtype=float, index=pd.DatetimeIndex([], name='date'), name='adjusted_close')
    series = df.set_index(pd.to_datetime(df['date']))['adjusted_close'].astype(float)
    series.index.name = 'date'
    return series.sort_index()
