"""
External API-related exceptions.
"""


class ExternalAPIError(Exception):
    """Base exception for external API errors."""
    pass


class WhatsAppAPIError(ExternalAPIError):
    """Exception raised when WhatsApp API calls fail."""
    pass


class MarketDataError(ExternalAPIError):
    """Exception raised when the market data API call fails."""
    pass


class StockNotFoundError(MarketDataError):
    """Exception raised when the provider has no stock under that name."""

    def __init__(self, stock_name: str):
        super().__init__(f"Stock not found: {stock_name}")
        self.stock_name = stock_name


class AnalysisGenerationError(ExternalAPIError):
    """Exception raised when the language model fails to produce an analysis."""
    pass


class TranslationError(AnalysisGenerationError):
    """Exception raised when an English analysis could not be translated."""
    pass
