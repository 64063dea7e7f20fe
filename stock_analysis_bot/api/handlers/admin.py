"""
Admin statistics handler.
"""

from dataclasses import asdict
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ...core.exceptions import PersistenceUnavailable
from ...utils.logging import get_logger
from ..dependencies import AppServices

logger = get_logger("admin")


class AdminHandler:
    """User and processing statistics for monitoring."""

    def __init__(self, services: AppServices):
        self.services = services
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):

        @self.router.get("/stats")
        async def user_stats():
            try:
                stats = await self.services.store.get_stats()
            except PersistenceUnavailable:
                logger.exception("Error getting user stats")
                return JSONResponse(
                    status_code=500,
                    content={"status": "error", "message": "Failed to get user statistics"},
                )
            return {
                "status": "success",
                "data": stats.model_dump(),
                "processing": asdict(self.services.dispatcher.stats()),
                "timestamp": datetime.now().isoformat(),
            }
