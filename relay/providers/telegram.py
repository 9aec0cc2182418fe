"""Telegram Bot API messenger."""

import logging

import httpx

from relay.config import TelegramConfig
from relay.errors import DeliveryError, parse_telegram_error

from .base import BaseMessenger

logger = logging.getLogger(__name__)

# Telegram rejects messages longer than 4096 characters.
TELEGRAM_MAX_LEN = 4096


def split_text(text: str, limit: int = TELEGRAM_MAX_LEN) -> list[str]:
    """Split text into chunks under `limit`, preferring newline boundaries."""
    if len(text) <= limit:
        return [text]

    chunks: list[str] = []
    remaining = text
    while remaining:
        if len(remaining) <= limit:
            chunks.append(remaining)
            break

        split_at = remaining.rfind("\n", 0, limit)
        if split_at <= 0:
            split_at = limit

        chunks.append(remaining[:split_at])
        remaining = remaining[split_at:].lstrip("\n")

    return chunks


class TelegramMessenger(BaseMessenger):
    """Telegram Bot API client (sendMessage only)."""

    def __init__(self, config: TelegramConfig, http_client: httpx.AsyncClient | None = None):
        self._config = config
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(config.timeout_seconds))

    @property
    def provider_name(self) -> str:
        return "telegram"

    @property
    def configured(self) -> bool:
        return bool(self._config.bot_token)

    @property
    def api_url(self) -> str:
        return f"{self._config.api_base}/bot{self._config.bot_token}"

    async def send(self, destination: int | str, text: str) -> None:
        if not self.configured:
            raise DeliveryError(destination, "Telegram bot token not configured")

        for chunk in split_text(text):
            await self._send_message(destination, chunk)

        logger.info(f"Message sent to Telegram chat {destination}")

    async def _send_message(self, chat_id: int | str, text: str) -> None:
        payload = {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": "Markdown",
            "disable_web_page_preview": self._config.disable_web_page_preview,
        }

        try:
            response = await self._http.post(f"{self.api_url}/sendMessage", json=payload)
        except httpx.TimeoutException as e:
            raise DeliveryError(chat_id, "Telegram API timed out") from e
        except httpx.HTTPError as e:
            raise DeliveryError(chat_id, f"Telegram API request failed: {e}") from e

        if not response.is_success:
            raise DeliveryError(
                chat_id,
                f"Telegram API error {response.status_code}: {parse_telegram_error(response.text)}",
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DeliveryError(chat_id, f"Telegram API returned invalid JSON: {response.text}") from e

        if not isinstance(data, dict) or not data.get("ok"):
            raise DeliveryError(chat_id, f"Telegram rejected: {parse_telegram_error(response.text)}")

    async def aclose(self) -> None:
        await self._http.aclose()
