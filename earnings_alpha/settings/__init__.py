"""
Settings Package.

Provides type-safe configuration via dataclasses alongside the config module.
"""
from .settings import (
    Config,
    Paths,
    MarketDataConfig,
    EventStudyParams,
    BootstrapParams,
    load_config,
)

__all__ = [
    'Config',
    'Paths',
    'MarketDataConfig',
    'EventStudyParams',
    'BootstrapParams',
    'load_config',
]
