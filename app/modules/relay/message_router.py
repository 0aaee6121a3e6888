"""Routing of observed posts into relay notifications."""

from typing import FrozenSet, Optional

from core.config import settings
from core.logging import get_module_logger
from integrations.telegram import TelegramClient
from models.events import ContentPosted
from models.state import RelayState
from modules.relay import control_panel, dedup, registry

logger = get_module_logger()


def notification_text(title: str, marker: Optional[str] = None) -> str:
    if marker is None:
        marker = settings.relay.UPDATE_MARKER
    return f"{title} {marker}"


def handle_content_posted(
    event: ContentPosted,
    state: RelayState,
    client: TelegramClient,
    admin_ids: FrozenSet[int],
    target_chat_id: Optional[int],
    now_ms: int,
) -> bool:
    """Decide whether a post produces a notification and send it.

    Order of checks:
      1. a private message from an administrator opens the control panel
      2. only groups, supergroups and channels are relayed
      3. the target chat itself is never a source
      4. unknown chats are registered on the fly
      5. the album gate records the group as seen
      6. global or per-channel mute drops the post
      7. a repeated album part inside the window is dropped

    Returns:
        True if a relay notification was sent.
    """
    chat = event.chat
    sender_id = event.sender.id if event.sender else None

    if chat.type == "private":
        if sender_id is not None and sender_id in admin_ids:
            control_panel.send_panel(client, chat.id, state)
        return False

    if not registry.is_eligible_chat(chat):
        return False

    if registry.is_target_chat(chat.id, target_chat_id):
        return False

    if registry.get(state, chat.id) is None:
        logger.info("channel_registered_from_post", chat_id=chat.id, chat_type=chat.type)
    record = registry.ensure_chat(state, chat)

    duplicate = dedup.check_and_mark(
        record, event.group_id, now_ms, settings.relay.DEDUP_WINDOW_MS
    )

    if state.global_muted or record.muted:
        logger.debug(
            "relay_muted",
            chat_id=chat.id,
            global_muted=state.global_muted,
            channel_muted=record.muted,
        )
        return False

    if duplicate:
        logger.debug("relay_duplicate_group", chat_id=chat.id, group_id=event.group_id)
        return False

    if target_chat_id is None:
        logger.warning("relay_target_not_configured", chat_id=chat.id)
        return False

    result = client.send_message(target_chat_id, notification_text(record.title))
    if result.is_success:
        logger.info("relay_notification_sent", chat_id=chat.id, title=record.title)
    else:
        logger.warning(
            "relay_notification_failed", chat_id=chat.id, error=result.message
        )
    return result.is_success
