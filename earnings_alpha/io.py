"""
Local cache of daily price histories.

One file per symbol holding the provider's 'date' and 'adjusted_close'
columns. Parquet by default; a '.csv' suffix selects CSV.
"""
import pandas as pd
import requests
from pathlib import Path
from typing import Optional, Tuple, Union

from . import log, market_data

logger = log.logger


def read_price_cache(file_path: Union[str, Path]) -> Optional[pd.DataFrame]:
    """
    Read a cached price frame.

    Returns None when the file is missing, unreadable, or lacks the price
    columns, so the caller knows to fetch.
    """
    path = Path(file_path)
    if not path.exists():
        return None

    try:
        if path.suffix == ".csv":
            df = pd.read_csv(path)
        else:
            df = pd.read_parquet(path)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to read price cache {path}: {e}")
        return None

    missing = [c for c in market_data.PRICE_COLUMNS if c not in df.columns]
    if missing:
        logger.warning(f"Price cache {path} lacks columns {missing}; ignoring it.")
        return None

    return df[market_data.PRICE_COLUMNS]


def write_price_cache(df: pd.DataFrame, file_path: Union[str, Path]) -> None:
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix == ".csv":
        df.to_csv(path, index=False)
    else:
        df.to_parquet(path, index=False)


def cached_price_history(
    file_path: Union[str, Path],
    symbol: str,
    session=None,
    force_fetch: bool = False,
    api_key: Optional[str] = None,
    outputsize: str = "full"
) -> Tuple[pd.Series, bool]:
    """
    Adjusted closes for a symbol, from the local cache or the provider.

    A fresh download is written back to the cache. Provider failures are
    logged and give an empty series.

    Returns:
        (series indexed by date, whether the provider was called)
    """
    path = Path(file_path)

    if not force_fetch:
        df = read_price_cache(path)
        if df is not None:
            logger.info(f"Loading {symbol} prices from local cache: {path}")
            return market_data.to_price_series(df), False

    logger.info(f"Fetching {symbol} prices from the provider...")
    if session is None:
        session = market_data.get_session()

    try:
        df = market_data.fetch_daily_adjusted(
            session, symbol, api_key=api_key, outputsize=outputsize
        )
    except (market_data.MarketDataError, requests.RequestException, ValueError) as e:
        logger.error(f"Price fetch for {symbol} failed: {e}")
        return market_data.to_price_series(pd.DataFrame()), True

    if df.empty:
        logger.warning(f"Provider returned no prices for {symbol}. Nothing cached.")
    else:
        logger.info(f"Saving {symbol} prices to {path}...")
        write_price_cache(df, path)

    return market_data.to_price_series(df), True
