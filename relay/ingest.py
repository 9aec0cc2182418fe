"""Webhook ingestion: verify, normalize, format, route."""

import logging
from collections.abc import Sequence

from pydantic import BaseModel

from relay.config import RouteConfig
from relay.errors import AuthenticationError
from relay.github import Event, extract_signature, format_message, parse_event, verify
from relay.providers.base import BaseMessenger
from relay.routing import RoutingReport, route

logger = logging.getLogger(__name__)

UNKNOWN_EVENT_KIND = "unknown"


class IngestResult(BaseModel):
    event: Event
    message: str
    report: RoutingReport


def authenticate(secret: str, body: bytes, signature_header: str | None) -> None:
    """Raise AuthenticationError unless the body carries a valid signature."""
    signature = extract_signature(signature_header)
    if signature is None:
        raise AuthenticationError("missing or invalid signature header")
    if not verify(secret.encode("utf-8"), body, signature):
        raise AuthenticationError("invalid webhook signature")


async def process_webhook(
    *,
    secret: str,
    rules: Sequence[RouteConfig],
    messenger: BaseMessenger,
    body: bytes,
    signature_header: str | None,
    event_kind: str | None,
) -> IngestResult:
    """Run one webhook delivery through the pipeline.

    Raises:
        AuthenticationError: signature missing or wrong; nothing else runs.
        MalformedBodyError: body could not be decoded; nothing is delivered.
    """
    authenticate(secret, body, signature_header)

    kind = event_kind or UNKNOWN_EVENT_KIND
    logger.info(f"Received webhook: {kind}")

    event = parse_event(kind, body)
    message = format_message(event)
    report = await route(rules, event, messenger, message)

    if report.all_failed:
        logger.error(f"All {report.matched} deliveries failed for {event.key} from {event.repository.full_name}")

    return IngestResult(event=event, message=message, report=report)
