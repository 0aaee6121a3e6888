"""Relay of new posts from monitored chats to one target chat."""

from modules.relay.base import handle_update
from modules.relay.fanout import kick

__all__ = ["handle_update", "kick"]
