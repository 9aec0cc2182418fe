"""GitHub webhook to Telegram relay."""

__version__ = "0.1.0"
