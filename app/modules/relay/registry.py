"""Registry of monitored channels.

A record exists only while the bot holds elevated membership in the chat.
The configured target chat never gets a record.
"""

from typing import Optional

from models.state import ChannelRecord, RelayState
from models.telegram import Chat

ELIGIBLE_CHAT_TYPES = frozenset({"group", "supergroup", "channel"})


def display_name(chat: Chat) -> str:
    """Name shown for a chat: its title, else its @handle, else its id."""
    if chat.title:
        return chat.title
    if chat.username:
        return chat.username
    return str(chat.id)


def is_eligible_chat(chat: Chat) -> bool:
    """Only groups, supergroups and channels can be monitored."""
    return chat.type in ELIGIBLE_CHAT_TYPES


def is_target_chat(chat_id: int, target_chat_id: Optional[int]) -> bool:
    return target_chat_id is not None and chat_id == target_chat_id


def get(state: RelayState, chat_id: int) -> Optional[ChannelRecord]:
    return state.channels.get(chat_id)


def ensure(
    state: RelayState,
    chat_id: int,
    observed_title: Optional[str],
    default_title: Optional[str] = None,
) -> ChannelRecord:
    """Return the record for chat_id, creating it with defaults if absent.

    An existing record only has its title refreshed, and only when
    observed_title is non-empty and differs. Mute and dedup fields are kept.
    """
    record = state.channels.get(chat_id)
    if record is None:
        record = ChannelRecord(title=observed_title or default_title or str(chat_id))
        state.channels[chat_id] = record
    elif observed_title and record.title != observed_title:
        record.title = observed_title
    return record


def ensure_chat(state: RelayState, chat: Chat) -> ChannelRecord:
    return ensure(state, chat.id, chat.title, default_title=display_name(chat))


def remove(state: RelayState, chat_id: int) -> bool:
    """Delete the record for chat_id.

    Returns:
        True if a record was removed, False if none was present.
    """
    return state.channels.pop(chat_id, None) is not None
