"""
Earnings Records Loader.

Reads symbol, EPS estimate, actual EPS and earnings date from a delimited file.
"""
import pandas as pd
from pathlib import Path
from typing import List, Union

from . import log
from .event_study.models import EarningsRecord

logger = log.logger

RECORD_COLUMNS = ['symbol', 'eps_estimate', 'actual_eps', 'earnings_date']


def normalize_symbol(series: pd.Series) -> pd.Series:
    """Ensure symbol is uppercase stripped string."""
    return series.astype(str).str.upper().str.strip()


def load_earnings_records(file_path: Union[str, Path], sep: str = ",") -> List[EarningsRecord]:
    """
    Load earnings records from a delimited file with a header row.

    Files with named columns (symbol, eps_estimate, actual_eps, earnings_date)
    are read by name; otherwise the first four columns are taken in that order.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file has fewer than four columns
    """
    path = Path(file_path)
    if not path.exists():
        logger.error(f"Failed to open file: {path}")
        raise FileNotFoundError(f"Earnings records file not found: {path}")

    df = pd.read_csv(path, sep=sep, dtype=str, skipinitialspace=True)
    df.columns = [str(c).strip().lower() for c in df.columns]

    if not set(RECORD_COLUMNS).issubset(df.columns):
        if len(df.columns) < len(RECORD_COLUMNS):
            raise ValueError(
                f"Expected columns {RECORD_COLUMNS} in {path}, found {list(df.columns)}."
            )
        df = df.iloc[:, :len(RECORD_COLUMNS)]
        df.columns = RECORD_COLUMNS

    records = records_from_frame(df)
    logger.info(f"Loaded {len(records)} earnings records from {path}.")
    return records


def records_from_frame(df: pd.DataFrame) -> List[EarningsRecord]:
    """
    Convert a DataFrame of raw record fields into EarningsRecord objects.

    Rows with a missing symbol or an unparseable EPS or date are dropped.
    """
    df = df[RECORD_COLUMNS].copy()

    df['symbol'] = normalize_symbol(df['symbol'].fillna(''))
    df['eps_estimate'] = pd.to_numeric(df['eps_estimate'], errors='coerce')
    df['actual_eps'] = pd.to_numeric(df['actual_eps'], errors='coerce')
    df['earnings_date'] = pd.to_datetime(df['earnings_date'], errors='coerce')

    invalid = df[['eps_estimate', 'actual_eps', 'earnings_date']].isna().any(axis=1) | (df['symbol'] == '')
    if invalid.any():
        logger.warning(f"Skipping {int(invalid.sum())} malformed earnings records.")
        df = df[~invalid]

    return [
        EarningsRecord(
            symbol=row.symbol,
            eps_estimate=float(row.eps_estimate),
            actual_eps=float(row.actual_eps),
            earnings_date=pd.Timestamp(row.earnings_date),
        )
        for row in df.itertuples(index=False)
    ]
