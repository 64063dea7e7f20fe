"""
Enums for the stock analysis bot.
"""

from .language import LanguagePreference
from .disposition import DispositionKind
from .risk import RiskLevel

__all__ = [
    "LanguagePreference",
    "DispositionKind",
    "RiskLevel",
]
