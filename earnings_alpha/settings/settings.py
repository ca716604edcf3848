"""
Type-Safe Configuration with Dataclasses.

Provides structured configuration for the earnings event study pipeline.
Defaults come from the config module (and so from the environment).
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .. import config


@dataclass
class Paths:
    """Project path configuration."""
    
    project_root: Path
    
    @property
    def data_dir(self) -> Path:
        return self.project_root / "data"
    
    @property
    def cache_dir(self) -> Path:
        return self.data_dir / "cache"
    
    @property
    def output_dir(self) -> Path:
        return self.data_dir / "output"
    
    @property
    def earnings_records(self) -> Path:
        return self.data_dir / "earnings.csv"
    
    @property
    def caar_output(self) -> Path:
        return self.output_dir / "caar_data.csv"
    
    @property
    def bootstrapped_caar_output(self) -> Path:
        return self.output_dir / "bootstrapped_caar.csv"
    
    def price_cache(self, symbol: str) -> Path:
        """Parquet cache file for one symbol's daily prices."""
        return self.cache_dir / f"{symbol.lower()}_daily.parquet"
    
    def ensure_dirs(self) -> None:
        """Create data directories if they don't exist."""
        self.data_dir.mkdir(exist_ok=True)
        self.cache_dir.mkdir(exist_ok=True)
        self.output_dir.mkdir(exist_ok=True)


@dataclass
class MarketDataConfig:
    """Market data provider configuration."""
    
    api_key: str = field(default_factory=lambda: config.ALPHA_VANTAGE_API_KEY)
    benchmark_symbol: str = config.BENCHMARK_SYMBOL
    request_delay_seconds: float = config.REQUEST_DELAY_SECONDS
    outputsize: str = "full"


@dataclass
class EventStudyParams:
    """Event window around the announcement (trading days)."""
    
    window_pre: int = config.EVENT_WINDOW_PRE
    window_post: int = config.EVENT_WINDOW_POST


@dataclass
class BootstrapParams:
    """Parameters for bootstrap resampling."""
    
    sample_size: int = config.BOOTSTRAP_SAMPLE_SIZE
    iterations: int = config.BOOTSTRAP_ITERATIONS
    
    # None draws a fresh OS-entropy seed on every run
    seed: Optional[int] = None


@dataclass
class Config:
    """Main configuration container."""
    
    paths: Paths
    market_data: MarketDataConfig = field(default_factory=MarketDataConfig)
    event_study: EventStudyParams = field(default_factory=EventStudyParams)
    bootstrap: BootstrapParams = field(default_factory=BootstrapParams)
    
    @classmethod
    def create(cls, project_root: Optional[Path] = None) -> 'Config':
        """Create configuration with default settings."""
        if project_root is None:
            project_root = config.PROJECT_ROOT
        
        cfg = cls(paths=Paths(project_root=Path(project_root)))
        cfg.paths.ensure_dirs()
        return cfg


def load_config() -> Config:
    """Load default configuration."""
    return Config.create(config.PROJECT_ROOT)
