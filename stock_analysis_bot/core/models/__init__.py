"""
Core data models for the stock analysis bot.
"""

from .user import UserPreference, UserStats
from .disposition import Disposition, LanguageSet, NeedsOnboarding, Ready
from .message import InboundMessage
from .stock import StockMetrics, StockSnapshot, YearlyFinancials, HistoricalFinancials

__all__ = [
    "UserPreference",
    "UserStats",
    "Disposition",
    "LanguageSet",
    "NeedsOnboarding",
    "Ready",
    "InboundMessage",
    "StockMetrics",
    "StockSnapshot",
    "YearlyFinancials",
    "HistoricalFinancials",
]
