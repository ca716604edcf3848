"""
Earnings Surprise Pipeline.

Loads earnings records, retrieves (or reads cached) daily prices for every
symbol and the benchmark, runs the event study, and exports the point-estimate
and bootstrapped CAAR tables.
"""
import time
import pandas as pd
from typing import Dict, Iterable, Optional, Tuple

from . import io, log, market_data, records, export
from .event_study import EarningsEventStudy, BootstrapResult, run_event_study
from .settings import Config, load_config

logger = log.logger


def load_price_history(
    symbol: str,
    cfg: Config,
    session=None,
    force_fetch: bool = False
) -> pd.Series:
    """
    Daily adjusted closes for one symbol, from cache or the provider.

    Returns an empty series if nothing could be retrieved.
    """
    series, fetched = io.cached_price_history(
        cfg.paths.price_cache(symbol),
        symbol,
        session=session,
        force_fetch=force_fetch,
        api_key=cfg.market_data.api_key,
        outputsize=cfg.market_data.outputsize,
    )

    if fetched and cfg.market_data.request_delay_seconds > 0:
        # Stay under the provider's rate limit
        time.sleep(cfg.market_data.request_delay_seconds)

    return series


def load_price_histories(
    symbols: Iterable[str],
    cfg: Config,
    session=None,
    force_fetch: bool = False
) -> Dict[str, pd.Series]:
    """Price histories keyed by symbol. Symbols with no data are omitted."""
    symbols = list(symbols)
    histories = {}
    for i, symbol in enumerate(symbols):
        logger.info(f"Retrieving data for {symbol} ({i + 1}/{len(symbols)})")
        history = load_price_history(symbol, cfg, session=session, force_fetch=force_fetch)
        if history.empty:
            logger.warning(f"No price data retrieved for {symbol}.")
            continue
        histories[symbol] = history
    return histories


def run_analysis(
    cfg: Optional[Config] = None,
    session=None,
    force_fetch: bool = False
) -> Tuple[EarningsEventStudy, BootstrapResult]:
    """
    Run the full workflow and write both CAAR tables.

    Raises:
        FileNotFoundError: If the earnings records file is missing
        RuntimeError: If no benchmark prices could be retrieved
    """
    if cfg is None:
        cfg = load_config()

    earnings = records.load_earnings_records(cfg.paths.earnings_records)

    if session is None:
        session = market_data.get_session()

    benchmark_symbol = cfg.market_data.benchmark_symbol
    logger.info(f"Retrieving market data ({benchmark_symbol})...")
    benchmark = load_price_history(benchmark_symbol, cfg, session=session, force_fetch=force_fetch)
    if benchmark.empty:
        raise RuntimeError(f"No benchmark prices retrieved for {benchmark_symbol}.")

    histories = load_price_histories(
        [r.symbol for r in earnings], cfg, session=session, force_fetch=force_fetch
    )

    study = run_event_study(
        earnings,
        histories,
        benchmark,
        pre=cfg.event_study.window_pre,
        post=cfg.event_study.window_post,
    )
    export.write_caar_csv(study.caar_table(), cfg.paths.caar_output)

    result = study.bootstrap(
        sample_size=cfg.bootstrap.sample_size,
        iterations=cfg.bootstrap.iterations,
        rng=cfg.bootstrap.seed,
    )
    export.write_caar_csv(result.to_frame(), cfg.paths.bootstrapped_caar_output)

    return study, result
