"""Telegram Bot API integration module."""

from .client import TelegramClient, get_client

__all__ = ["TelegramClient", "get_client"]
