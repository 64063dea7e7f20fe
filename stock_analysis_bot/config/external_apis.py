"""
External API configuration.
"""

from typing import Dict, Optional
from pydantic import BaseModel

from .settings import Settings


class ExternalAPIConfig(BaseModel):
    """External API configuration settings."""

    # Meta WhatsApp Cloud API
    graph_api_url: str = "https://graph.facebook.com/v22.0"
    phone_number_id: Optional[str] = None
    access_token: Optional[str] = None
    wa_timeout: float = 10.0

    # IndianAPI via RapidAPI
    market_data_base_url: str = "https://indian-stock-exchange-api2.p.rapidapi.com"
    rapidapi_host: str = "indian-stock-exchange-api2.p.rapidapi.com"
    rapidapi_key: Optional[str] = None
    market_data_timeout: float = 10.0

    # OpenAI API
    openai_api_key: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExternalAPIConfig":
        return cls(
            graph_api_url=settings.meta_graph_api_url,
            phone_number_id=settings.meta_phone_number_id,
            access_token=settings.meta_access_token,
            wa_timeout=settings.wa_send_timeout,
            market_data_base_url=settings.market_data_base_url,
            rapidapi_host=settings.rapidapi_host,
            rapidapi_key=settings.rapidapi_key,
            market_data_timeout=settings.market_data_timeout,
            openai_api_key=settings.openai_api_key,
        )

    def get_whatsapp_messages_url(self) -> Optional[str]:
        """Get Meta messages endpoint if configured."""
        if self.phone_number_id:
            return f"{self.graph_api_url.rstrip('/')}/{self.phone_number_id}/messages"
        return None

    def get_whatsapp_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

    def get_stock_url(self) -> str:
        """Get the stock lookup endpoint."""
        return f"{self.market_data_base_url.rstrip('/')}/stock"

    def get_market_data_headers(self) -> Dict[str, str]:
        return {
            "x-rapidapi-host": self.rapidapi_host,
            "x-rapidapi-key": self.rapidapi_key or "",
            "Accept": "application/json",
        }

    def is_whatsapp_configured(self) -> bool:
        """Check if WhatsApp API is properly configured."""
        return bool(self.phone_number_id and self.access_token)

    def is_market_data_configured(self) -> bool:
        """Check if the market data API is properly configured."""
        return bool(self.rapidapi_key)

    def is_openai_configured(self) -> bool:
        """Check if OpenAI API is properly configured."""
        return bool(self.openai_api_key)
