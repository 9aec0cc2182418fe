"""Match events against routing rules and fan messages out to chats."""

import logging
from collections.abc import Sequence

from pydantic import BaseModel

from relay.config import RouteConfig
from relay.errors import DeliveryError
from relay.github import Event, format_message
from relay.providers.base import BaseMessenger

logger = logging.getLogger(__name__)

WILDCARD = "*"


class DeliveryOutcome(BaseModel):
    destination: int | str
    ok: bool
    error: str | None = None


class RoutingReport(BaseModel):
    outcomes: list[DeliveryOutcome] = []

    @property
    def matched(self) -> int:
        return len(self.outcomes)

    @property
    def delivered(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return self.matched - self.delivered

    @property
    def all_failed(self) -> bool:
        """True when at least one rule matched and no delivery succeeded."""
        return self.matched > 0 and self.delivered == 0


def matches_repo(pattern: str, full_name: str) -> bool:
    if pattern == WILDCARD:
        return True
    if pattern.endswith(WILDCARD):
        return full_name.startswith(pattern.rstrip(WILDCARD))
    return full_name == pattern


def matches_event(subscribed: Sequence[str], key: str, kind: str) -> bool:
    return any(s == WILDCARD or s == key or s == kind for s in subscribed)


def matching_rules(rules: Sequence[RouteConfig], event: Event) -> list[RouteConfig]:
    """Rules eligible for `event`, in configured order."""
    key = event.key
    return [
        rule
        for rule in rules
        if matches_repo(rule.repo_pattern, event.repository.full_name)
        and matches_event(rule.events, key, event.kind)
    ]


async def route(
    rules: Sequence[RouteConfig],
    event: Event,
    messenger: BaseMessenger,
    message: str | None = None,
) -> RoutingReport:
    """Deliver `event` to every matching rule's chat.

    Each destination is attempted in rule order; a failure is recorded in
    the report and never stops the remaining deliveries.
    """
    text = message if message is not None else format_message(event)
    report = RoutingReport()

    for rule in matching_rules(rules, event):
        logger.info(
            f"Routing {event.key} from {event.repository.full_name} to chat {rule.chat_id}"
        )
        try:
            await messenger.send(rule.chat_id, text)
        except DeliveryError as e:
            logger.warning(f"Failed to send message to chat {rule.chat_id}: {e.reason}")
            report.outcomes.append(DeliveryOutcome(destination=rule.chat_id, ok=False, error=e.reason))
        except Exception as e:
            logger.exception(f"Unexpected error sending to chat {rule.chat_id}")
            report.outcomes.append(DeliveryOutcome(destination=rule.chat_id, ok=False, error=str(e)))
        else:
            report.outcomes.append(DeliveryOutcome(destination=rule.chat_id, ok=True))

    return report
