"""GitHub → Telegram relay - FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from relay import __version__
from relay.config import Settings, get_settings
from relay.providers import BaseMessenger, TelegramMessenger
from relay.routers import health, webhooks

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def create_app(settings: Settings | None = None, messenger: BaseMessenger | None = None) -> FastAPI:
    """Build the relay app. Settings and messenger are injectable for tests."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if getattr(app.state, "messenger", None) is None:
            owned = TelegramMessenger(settings.telegram)
            app.state.messenger = owned
        logger.info(f"Relay ready with {len(settings.routing)} route(s)")
        try:
            yield
        finally:
            if owned is not None:
                await owned.aclose()
                app.state.messenger = None

    app = FastAPI(
        title="GitHub Telegram Relay",
        description="Relays signed GitHub webhooks to Telegram chats",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.messenger = messenger

    app.include_router(health.router)
    app.include_router(webhooks.router, prefix="/webhook", tags=["webhooks"])

    return app


app = create_app()
