"""
Custom exceptions for the stock analysis bot.
"""

from .persistence import PersistenceUnavailable
from .delivery import InvalidArgumentError
from .external import (
    ExternalAPIError,
    WhatsAppAPIError,
    MarketDataError,
    StockNotFoundError,
    AnalysisGenerationError,
    TranslationError,
)

__all__ = [
    "PersistenceUnavailable",
    "InvalidArgumentError",
    "ExternalAPIError",
    "WhatsAppAPIError",
    "MarketDataError",
    "StockNotFoundError",
    "AnalysisGenerationError",
    "TranslationError",
]
