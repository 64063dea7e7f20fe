"""
Application settings and configuration.
"""

from functools import lru_cache
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Application
    app_name: str = "WhatsApp Stock Bot"
    app_version: str = "2.0.0"
    debug: bool = False

    # Database
    users_db_path: str = "users.db"

    # Meta WhatsApp Cloud API
    meta_graph_api_url: str = "https://graph.facebook.com/v22.0"
    meta_phone_number_id: Optional[str] = None
    meta_access_token: Optional[str] = None
    webhook_verify_token: Optional[str] = None
    wa_max_message_length: int = Field(default=1500, gt=0)
    wa_chunk_delay_seconds: float = 1.0
    wa_send_timeout: float = 10.0

    # Market data (IndianAPI via RapidAPI)
    rapidapi_key: Optional[str] = None
    rapidapi_host: str = "indian-stock-exchange-api2.p.rapidapi.com"
    market_data_base_url: str = "https://indian-stock-exchange-api2.p.rapidapi.com"
    market_data_timeout: float = 10.0
    metrics_strategy: str = "financials"

    # OpenAI
    openai_api_key: Optional[str] = None
    analysis_model: str = "gpt-4o-mini"
    analysis_strategy: str = "two_pass"
    stock_delay_seconds: float = 1.0

    # Background processing
    worker_count: int = Field(default=2, gt=0)
    queue_maxsize: int = 1000

    # Events / logging
    event_log_path: str = "stock_bot_events.jsonl"
    timezone: str = "Asia/Kolkata"
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
