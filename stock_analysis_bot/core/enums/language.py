"""
Language-related enums.
"""

from enum import Enum
from typing import Optional


class LanguagePreference(str, Enum):
    """Reply language chosen by a user. PENDING means not chosen yet."""

    PENDING = "pending"
    ENGLISH = "english"
    HINDI = "hindi"
    GUJARATI = "gujarati"

    @classmethod
    def from_stored(cls, value: Optional[str]) -> "LanguagePreference":
        """Read a persisted value; anything unknown collapses to PENDING."""
        if not value:
            return cls.PENDING
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.PENDING

    @property
    def is_selected(self) -> bool:
        return self is not LanguagePreference.PENDING
