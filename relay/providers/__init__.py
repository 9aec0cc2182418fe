"""
Chat Delivery Clients

Outbound messenger adapters for the relay.
"""

from .base import BaseMessenger
from .telegram import TelegramMessenger

__all__ = ["BaseMessenger", "TelegramMessenger"]
