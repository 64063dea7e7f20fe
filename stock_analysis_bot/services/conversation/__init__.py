"""
Conversation orchestration module.
"""

from .service import ConversationService
from .dispatcher import DispatcherStats, MessageDispatcher

__all__ = ["ConversationService", "DispatcherStats", "MessageDispatcher"]
