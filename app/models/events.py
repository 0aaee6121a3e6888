"""Inbound relay events.

Each Telegram update is classified once, at ingress, into exactly one of the
event kinds below. Updates that match none of them are ignored.
"""

from dataclasses import dataclass
from typing import Optional, Union

from models.telegram import Chat, Update, User

ELEVATED_STATUSES = frozenset({"administrator", "member"})
DEPARTED_STATUSES = frozenset({"left", "kicked"})


@dataclass(frozen=True)
class MembershipChanged:
    """The bot's own membership in a chat changed."""

    chat: Chat
    new_status: str


@dataclass(frozen=True)
class InteractiveAction:
    """An inline keyboard button was pressed."""

    callback_id: str
    actor: User
    action_tag: str
    origin_chat_id: Optional[int] = None
    origin_message_id: Optional[int] = None


@dataclass(frozen=True)
class ContentPosted:
    """A message or channel post was observed."""

    chat: Chat
    sender: Optional[User] = None
    group_id: Optional[str] = None


RelayEvent = Union[MembershipChanged, InteractiveAction, ContentPosted]


def classify_update(update: Update) -> Optional[RelayEvent]:
    """Map a Telegram update onto a relay event.

    Precedence follows the Bot API field order the relay cares about:
    my_chat_member, callback_query, message, channel_post.

    Returns:
        The event, or None when the update carries nothing the relay handles.
    """
    if update.my_chat_member is not None:
        member_update = update.my_chat_member
        return MembershipChanged(
            chat=member_update.chat,
            new_status=member_update.new_chat_member.status,
        )

    if update.callback_query is not None:
        callback = update.callback_query
        origin = callback.message
        return InteractiveAction(
            callback_id=callback.id,
            actor=callback.from_user,
            action_tag=callback.data or "",
            origin_chat_id=origin.chat.id if origin else None,
            origin_message_id=origin.message_id if origin else None,
        )

    message = update.message or update.channel_post
    if message is not None:
        return ContentPosted(
            chat=message.chat,
            sender=message.from_user,
            group_id=message.media_group_id,
        )

    return None
