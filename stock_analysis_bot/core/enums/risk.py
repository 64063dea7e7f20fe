"""
Risk classification derived from financial volatility.
"""

from enum import Enum


class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @classmethod
    def from_volatility(cls, score: float) -> "RiskLevel":
        """Above 30 is high, below 15 is low, anything else moderate."""
        if score > 30:
            return cls.HIGH
        if score < 15:
            return cls.LOW
        return cls.MODERATE
