"""Error types for the relay pipeline and Telegram error-parsing helpers."""

import json


class RelayError(Exception):
    """Base class for errors raised by the relay."""


class AuthenticationError(RelayError):
    """Missing, malformed or mismatched webhook signature."""


class MalformedBodyError(RelayError):
    """Request body is neither JSON nor a form with a JSON `payload` field."""


class DeliveryError(RelayError):
    """A single destination could not be reached.

    Recoverable: the routing engine records it and moves on to the next
    destination.
    """

    def __init__(self, destination: int | str, reason: str):
        super().__init__(f"delivery to {destination} failed: {reason}")
        self.destination = destination
        self.reason = reason


def parse_telegram_error(response_text: str) -> str:
    """Extract a readable message from a Telegram Bot API error response.

    The Bot API returns JSON like {"ok": false, "error_code": 400, "description": "..."}.
    Returns "error_code: description" when parseable, raw text otherwise.
    """
    try:
        body = json.loads(response_text)
    except ValueError:
        return response_text
    if isinstance(body, dict):
        description = body.get("description", "")
        code = body.get("error_code")
        if description:
            return f"{code}: {description}" if code else description
    return response_text
