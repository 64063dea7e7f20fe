"""
Health check handler.
"""

from datetime import datetime
from typing import Dict

from fastapi import APIRouter
from pydantic import BaseModel

from ...config import ExternalAPIConfig, Settings


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    version: str
    uptime: float
    integrations: Dict[str, bool]


class HealthHandler:
    """Liveness plus a summary of which upstream APIs have credentials."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.api_config = ExternalAPIConfig.from_settings(settings)
        self.started_at = datetime.now()
        self.router = APIRouter()
        self._setup_routes()

    def _integrations(self) -> Dict[str, bool]:
        return {
            "whatsapp": self.api_config.is_whatsapp_configured(),
            "market_data": self.api_config.is_market_data_configured(),
            "openai": self.api_config.is_openai_configured(),
        }

    def _setup_routes(self):

        @self.router.get("/")
        async def root():
            return {
                "status": f"{self.settings.app_name} running (Meta API)",
                "timestamp": datetime.now().isoformat(),
                "version": self.settings.app_version,
            }

        @self.router.get("/health", response_model=HealthResponse)
        async def health_check():
            now = datetime.now()
            return HealthResponse(
                status="healthy",
                timestamp=now.isoformat(),
                version=self.settings.app_version,
                uptime=(now - self.started_at).total_seconds(),
                integrations=self._integrations(),
            )
