"""
Inbound message model.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class InboundMessage:
    """A text message received from the WhatsApp webhook."""

    sender: str
    text: str
    message_id: Optional[str] = None
    profile_name: Optional[str] = None
    timestamp: Optional[str] = None
