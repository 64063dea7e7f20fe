"""
Market data module.
"""

from .service import MarketDataService
from .metrics import (
    MetricsExtractor,
    FinancialsMetricsExtractor,
    KeyMetricsExtractor,
    analyze_history,
    get_extractor,
)

__all__ = [
    "MarketDataService",
    "MetricsExtractor",
    "FinancialsMetricsExtractor",
    "KeyMetricsExtractor",
    "analyze_history",
    "get_extractor",
]
