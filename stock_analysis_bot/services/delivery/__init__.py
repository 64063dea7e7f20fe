"""
Outbound delivery module.
"""

from .segmenter import BREAK_MARKERS, OutboundMessage, segment
from .sender import WhatsAppSender

__all__ = ["BREAK_MARKERS", "OutboundMessage", "segment", "WhatsAppSender"]
