"""
Event Study Constants.

Defines group labels, surprise thresholds, and event window defaults.
"""
from typing import Tuple

# =============================================================================
# Surprise Groups
# =============================================================================

BEAT: str = 'Beat'
MEET: str = 'Meet'
MISS: str = 'Miss'

# Column order for exported tables
GROUP_NAMES: Tuple[str, ...] = (BEAT, MEET, MISS)

# Surprise thresholds in percent. Both are strict: exactly +/-5.0 is a Meet.
BEAT_THRESHOLD: float = 5.0
MISS_THRESHOLD: float = -5.0

# =============================================================================
# Event Window
# =============================================================================

# Day 0 of a computed series maps to T-30 (30 trading days before the
# announcement), so the reported day offset is index - ANCHOR_OFFSET.
ANCHOR_OFFSET: int = 30

# Rows shown either side of the midpoint in a stock summary
SUMMARY_WINDOW: int = 5

# =============================================================================
# Metrics
# =============================================================================

AAR: str = 'AAR'
CAAR: str = 'CAAR'
METRIC_NAMES: Tuple[str, ...] = (AAR, CAAR)

DAY_COLUMN: str = 'Day'
