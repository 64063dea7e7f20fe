"""
FastAPI application factory and configuration.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import Settings, get_settings
from ..utils import event_log
from ..utils.logging import configure_logging, get_logger
from .dependencies import AppServices, build_services
from .handlers import AdminHandler, HealthHandler
from .middleware import LoggingMiddleware, SecurityHeaders
from .webhooks import WhatsAppWebhook

logger = get_logger("app")


def _log_configuration(settings: Settings) -> None:
    for name in (
        "meta_phone_number_id",
        "meta_access_token",
        "webhook_verify_token",
        "openai_api_key",
        "rapidapi_key",
    ):
        state = "set" if getattr(settings, name) else "missing"
        logger.info("%s: %s", name.upper(), state)


def create_app(
    settings: Optional[Settings] = None, services: Optional[AppServices] = None
) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or (services.settings if services else get_settings())
    services = services or build_services(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        event_log.set_log_path(settings.event_log_path)
        event_log.set_timezone(settings.timezone)
        _log_configuration(settings)
        await services.store.initialize()
        await services.dispatcher.start()
        logger.info("%s %s ready", settings.app_name, settings.app_version)
        try:
            yield
        finally:
            await services.dispatcher.stop()

    app = FastAPI(
        title=settings.app_name,
        description="WhatsApp stock analysis assistant",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.services = services

    # Add custom middleware
    app.add_middleware(SecurityHeaders)
    app.add_middleware(LoggingMiddleware)

    # Initialize handlers
    health_handler = HealthHandler(settings)
    admin_handler = AdminHandler(services)
    whatsapp_webhook = WhatsAppWebhook(services)

    # Register routes
    app.include_router(health_handler.router, tags=["health"])
    app.include_router(admin_handler.router, prefix="/admin", tags=["admin"])
    app.include_router(whatsapp_webhook.router, prefix="/webhook", tags=["webhooks"])

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Route not found",
                    "message": f"{request.method} {request.url.path} is not supported",
                },
            )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    return app
