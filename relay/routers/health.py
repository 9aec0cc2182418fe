from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from relay import __version__
from relay.config import Settings
from relay.dependencies import get_app_settings


router = APIRouter(tags=["health"])

_startup_time = datetime.now(timezone.utc)


class EndpointInfo(BaseModel):
    path: str
    description: str
    provider: str | None = None


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float
    endpoints: list[EndpointInfo]


class IntegrationStatus(BaseModel):
    connected: bool
    status: str
    last_check: str | None = None


class IntegrationsResponse(BaseModel):
    telegram: IntegrationStatus
    github_webhook: IntegrationStatus
    routes: int


ENDPOINTS = [
    EndpointInfo(path="/health", description="Relay status and API directory"),
    EndpointInfo(path="/health/integrations", description="Integration configuration status"),
    EndpointInfo(path="/webhook/github", description="GitHub webhook receiver", provider="Telegram"),
]


def _check_telegram(settings: Settings) -> IntegrationStatus:
    if not settings.telegram.bot_token:
        return IntegrationStatus(connected=False, status="bot token not configured")
    return IntegrationStatus(
        connected=True,
        status="ok",
        last_check=datetime.now(timezone.utc).isoformat(),
    )


def _check_github_webhook(settings: Settings) -> IntegrationStatus:
    if not settings.github.webhook_secret:
        return IntegrationStatus(connected=False, status="webhook secret not configured")
    if not settings.routing:
        return IntegrationStatus(connected=True, status="no routes configured")
    return IntegrationStatus(
        connected=True,
        status="ok",
        last_check=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check():
    uptime = (datetime.now(timezone.utc) - _startup_time).total_seconds()

    return HealthResponse(
        status="ok",
        version=__version__,
        uptime_seconds=round(uptime, 2),
        endpoints=ENDPOINTS,
    )


@router.get("/health/integrations", response_model=IntegrationsResponse)
async def get_integrations(settings: Settings = Depends(get_app_settings)):
    return IntegrationsResponse(
        telegram=_check_telegram(settings),
        github_webhook=_check_github_webhook(settings),
        routes=len(settings.routing),
    )
