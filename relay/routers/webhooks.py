"""GitHub webhook endpoint - verifies, normalizes and relays events to chats."""

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from pydantic import BaseModel

from relay.config import Settings
from relay.dependencies import get_app_settings, get_messenger
from relay.errors import AuthenticationError, MalformedBodyError
from relay.ingest import process_webhook
from relay.providers.base import BaseMessenger

logger = logging.getLogger(__name__)
router = APIRouter()


class WebhookResponse(BaseModel):
    event: str
    key: str
    matched: int
    delivered: int
    failed: int


@router.post("/github", response_model=WebhookResponse)
async def github_webhook(
    request: Request,
    signature: str | None = Header(None, alias="X-Hub-Signature-256"),
    event: str | None = Header(None, alias="X-GitHub-Event"),
    settings: Settings = Depends(get_app_settings),
    messenger: BaseMessenger = Depends(get_messenger),
):
    """Receive a GitHub webhook and forward it to every subscribed chat."""
    if not settings.github.webhook_secret:
        raise HTTPException(503, "GitHub webhook secret not configured")

    body = await request.body()

    try:
        result = await process_webhook(
            secret=settings.github.webhook_secret,
            rules=settings.routing,
            messenger=messenger,
            body=body,
            signature_header=signature,
            event_kind=event,
        )
    except AuthenticationError as e:
        logger.warning(f"Rejected webhook: {e}")
        raise HTTPException(401, str(e))
    except MalformedBodyError as e:
        logger.error(f"Failed to parse {event or 'unknown'} event: {e}")
        raise HTTPException(400, str(e))

    report = result.report
    if report.all_failed:
        raise HTTPException(502, f"All {report.matched} deliveries failed")

    return WebhookResponse(
        event=result.event.kind,
        key=result.event.key,
        matched=report.matched,
        delivered=report.delivered,
        failed=report.failed,
    )
