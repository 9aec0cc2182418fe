"""FastAPI dependencies for per-app state."""

from fastapi import HTTPException, Request

from relay.config import Settings
from relay.providers.base import BaseMessenger


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_messenger(request: Request) -> BaseMessenger:
    messenger = getattr(request.app.state, "messenger", None)
    if messenger is None:
        raise HTTPException(503, "Messenger not initialised")
    return messenger
