"""
Service layer for the stock analysis bot.
"""

from .users import UserStore, PreferenceResolver
from .delivery import WhatsAppSender, segment
from .market_data import MarketDataService
from .analysis import StockAnalysisPipeline
from .conversation import ConversationService, MessageDispatcher

__all__ = [
    "UserStore",
    "PreferenceResolver",
    "WhatsAppSender",
    "segment",
    "MarketDataService",
    "StockAnalysisPipeline",
    "ConversationService",
    "MessageDispatcher",
]
