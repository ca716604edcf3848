"""
Integration tests for earnings_alpha.pipeline with a mocked provider.
"""
import pytest
import pandas as pd
import numpy as np
from unittest.mock import MagicMock

from earnings_alpha import pipeline
from earnings_alpha.settings import Config


DRIFTS = {'SPY': 1.001, 'BEAT1': 1.004, 'MEET1': 1.001, 'MISS1': 0.997}


def provider_csv(symbol, n_days=80):
    """Daily adjusted CSV for a symbol, most recent day first."""
    dates = pd.bdate_range('2024-01-01', periods=n_days)
    prices = 100 * DRIFTS[symbol] ** np.arange(n_days)
    df = pd.DataFrame({
        'timestamp': dates.strftime('%Y-%m-%d'),
        'open': prices, 'high': prices, 'low': prices, 'close': prices,
        'adjusted_close': prices,
        'volume': 1000,
    })
    return df.iloc[::-1].to_csv(index=False)


@pytest.fixture
def provider_session():
    """Mock session answering per requested symbol."""
    def get(url, params=None, timeout=None):
        response = MagicMock()
        symbol = params['symbol']
        if symbol in DRIFTS:
            response.text = provider_csv(symbol)
        else:
            response.text = '{"Error Message": "Invalid API call."}'
        return response
    
    session = MagicMock()
    session.get.side_effect = get
    return session


@pytest.fixture
def cfg(tmp_path):
    """Configuration rooted in a temporary project directory."""
    cfg = Config.create(tmp_path)
    cfg.market_data.api_key = 'KEY'
    cfg.market_data.request_delay_seconds = 0
    cfg.event_study.window_pre = 10
    cfg.event_study.window_post = 10
    cfg.bootstrap.sample_size = 2
    cfg.bootstrap.iterations = 3
    cfg.bootstrap.seed = 0
    
    cfg.paths.earnings_records.write_text(
        "symbol,eps_estimate,actual_eps,earnings_date\n"
        "BEAT1,1.00,1.20,2024-03-01\n"
        "MEET1,1.00,1.01,2024-03-01\n"
        "MISS1,1.00,0.80,2024-03-01\n"
        "GONE1,1.00,0.80,2024-03-01\n"
    )
    return cfg


class TestRunAnalysis:
    """End-to-end workflow tests."""
    
    def test_writes_both_tables(self, cfg, provider_session):
        """Test that point-estimate and bootstrapped CAAR files are written."""
        study, result = pipeline.run_analysis(cfg, session=provider_session)
        
        assert study.group_sizes() == {'Beat': 1, 'Meet': 1, 'Miss': 1}
        assert cfg.paths.caar_output.exists()
        assert cfg.paths.bootstrapped_caar_output.exists()
        
        exported = pd.read_csv(cfg.paths.caar_output)
        assert list(exported.columns) == ['Day', 'Beat', 'Meet', 'Miss']
        assert exported['Day'].iloc[0] == -10
        assert len(exported) == 20
        
        # One stock per group and a full-population sample: bootstrap == point estimate
        np.testing.assert_array_equal(result.average_caar['Beat'], study.compute_group('Beat')[1])
    
    def test_prices_are_cached(self, cfg, provider_session):
        """Test that a second run reads from the cache instead of the provider."""
        pipeline.run_analysis(cfg, session=provider_session)
        calls = provider_session.get.call_count
        
        pipeline.run_analysis(cfg, session=provider_session)
        
        # Only the symbol that failed is requested again
        assert provider_session.get.call_count == calls + 1
        assert cfg.paths.price_cache('SPY').exists()
    
    def test_missing_benchmark_raises(self, cfg, provider_session):
        """Test that the run stops without benchmark prices."""
        cfg.market_data.benchmark_symbol = 'NOPE'
        
        with pytest.raises(RuntimeError):
            pipeline.run_analysis(cfg, session=provider_session)
    
    def test_missing_records_file(self, cfg, provider_session):
        """Test that a missing records file raises FileNotFoundError."""
        cfg.paths.earnings_records.unlink()
        
        with pytest.raises(FileNotFoundError):
            pipeline.run_analysis(cfg, session=provider_session)


class TestLoadPriceHistory:
    """Tests for the per-symbol price loader and its rate-limit pause."""
    
    def test_unreadable_cache_refetches_and_waits(self, cfg, provider_session, monkeypatch):
        """Test that a corrupt cache file leads to a fetch followed by the pause."""
        sleeps = []
        monkeypatch.setattr(pipeline.time, 'sleep', sleeps.append)
        cfg.market_data.request_delay_seconds = 0.5
        cfg.paths.price_cache('SPY').write_bytes(b'not a parquet file')
        
        series = pipeline.load_price_history('SPY', cfg, session=provider_session)
        
        assert len(series) == 80
        assert provider_session.get.call_count == 1
        assert sleeps == [0.5]
    
    def test_cached_read_does_not_wait(self, cfg, provider_session, monkeypatch):
        """Test that a cache hit skips the pause."""
        pipeline.load_price_history('SPY', cfg, session=provider_session)
        
        sleeps = []
        monkeypatch.setattr(pipeline.time, 'sleep', sleeps.append)
        cfg.market_data.request_delay_seconds = 0.5
        
        series = pipeline.load_price_history('SPY', cfg, session=provider_session)
        
        assert len(series) == 80
        assert provider_session.get.call_count == 1
        assert sleeps == []
