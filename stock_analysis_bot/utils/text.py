"""
Text processing utilities.
"""

import re
from typing import Any, Dict, List, Optional

from ..core.models import InboundMessage

_STOCK_SEPARATORS = re.compile(r"[,\s]+")


def _dicts(items: Any) -> List[Dict[str, Any]]:
    """The dict elements of ``items``; anything that is not a list yields none."""
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def parse_stock_names(query_text: str) -> List[str]:
    """Split a query like ``"Reliance, TCS infy"`` into stock names."""
    return [name for name in _STOCK_SEPARATORS.split(query_text.strip()) if name]


class MetaTextExtractor:
    """Extract text messages from a Meta Cloud API webhook payload."""

    @staticmethod
    def is_whatsapp_payload(body: Dict[str, Any]) -> bool:
        return isinstance(body, dict) and body.get("object") == "whatsapp_business_account"

    @staticmethod
    def extract_messages(body: Dict[str, Any]) -> List[InboundMessage]:
        """Return every text message in the payload, in delivery order.

        Non-text messages (images, audio, reactions...) and malformed
        elements at any level are skipped.
        """
        messages: List[InboundMessage] = []
        for entry in _dicts(body.get("entry")):
            for change in _dicts(entry.get("changes")):
                if change.get("field") != "messages":
                    continue
                value = change.get("value")
                if not isinstance(value, dict):
                    continue
                contacts = {}
                for contact in _dicts(value.get("contacts")):
                    wa_id, profile = contact.get("wa_id"), contact.get("profile")
                    if not isinstance(wa_id, str):
                        continue
                    contacts[wa_id] = (
                        _str_or_none(profile.get("name")) if isinstance(profile, dict) else None
                    )
                for msg in _dicts(value.get("messages")):
                    if msg.get("type") != "text":
                        continue
                    sender = msg.get("from")
                    text = msg.get("text")
                    text = text.get("body") if isinstance(text, dict) else None
                    if not isinstance(sender, str) or not sender or not isinstance(text, str):
                        continue
                    messages.append(
                        InboundMessage(
                            sender=sender,
                            text=text,
                            message_id=_str_or_none(msg.get("id")),
                            profile_name=contacts.get(sender),
                            timestamp=_str_or_none(msg.get("timestamp")),
                        )
                    )
        return messages
