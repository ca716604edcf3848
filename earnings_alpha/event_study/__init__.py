"""
Earnings Event Study Package.

Provides abnormal returns, surprise classification, AAR/CAAR aggregation
and bootstrap resampling for Beat/Meet/Miss groups.
"""
from .constants import (
    BEAT,
    MEET,
    MISS,
    GROUP_NAMES,
    BEAT_THRESHOLD,
    MISS_THRESHOLD,
    ANCHOR_OFFSET,
    AAR,
    CAAR,
)
from .returns import calculate_returns, calculate_abnormal_returns
from .classification import surprise_percentage, classify_surprise
from .models import EarningsRecord, Stock, StockUniverse, Group
from .aggregation import calculate_aar, calculate_caar, aggregate, to_event_time, event_time_table
from .bootstrap import (
    BootstrapResult,
    bootstrap_caar,
    sample_members,
    run_iteration,
    average_caar_curves,
    resolve_rng,
)
from .alignment import align_event_window
from .runner import EarningsEventStudy, run_event_study, stock_summary

__all__ = [
    # Constants
    'BEAT',
    'MEET',
    'MISS',
    'GROUP_NAMES',
    'BEAT_THRESHOLD',
    'MISS_THRESHOLD',
    'ANCHOR_OFFSET',
    'AAR',
    'CAAR',
    # Returns
    'calculate_returns',
    'calculate_abnormal_returns',
    # Classification
    'surprise_percentage',
    'classify_surprise',
    # Models
    'EarningsRecord',
    'Stock',
    'StockUniverse',
    'Group',
    # Aggregation
    'calculate_aar',
    'calculate_caar',
    'aggregate',
    'to_event_time',
    'event_time_table',
    # Bootstrap
    'BootstrapResult',
    'bootstrap_caar',
    'sample_members',
    'run_iteration',
    'average_caar_curves',
    'resolve_rng',
    # Alignment
    'align_event_window',
    # Runner
    'EarningsEventStudy',
    'run_event_study',
    'stock_summary',
]
