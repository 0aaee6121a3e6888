"""Bot membership lifecycle: Unmonitored -> Monitored -> Unmonitored."""

from typing import FrozenSet, Optional

from core.logging import get_module_logger
from integrations.telegram import TelegramClient
from models.events import DEPARTED_STATUSES, ELEVATED_STATUSES, MembershipChanged
from models.state import RelayState
from modules.relay import registry
from modules.relay.notifications import notify_admins

logger = get_module_logger()


def handle_membership_changed(
    event: MembershipChanged,
    state: RelayState,
    client: TelegramClient,
    admin_ids: FrozenSet[int],
    target_chat_id: Optional[int],
) -> Optional[str]:
    """Apply a membership change to the registry.

    The registry change is committed before administrators are notified, so a
    failed notification never undoes it.

    Returns:
        "added", "removed", or None when nothing changed.
    """
    chat = event.chat
    if registry.is_target_chat(chat.id, target_chat_id):
        logger.info("membership_change_on_target_ignored", chat_id=chat.id)
        return None

    name = registry.display_name(chat)
    status = event.new_status

    if status in ELEVATED_STATUSES:
        if not registry.is_eligible_chat(chat):
            logger.info(
                "membership_change_on_ineligible_chat",
                chat_id=chat.id,
                chat_type=chat.type,
            )
            return None
        if registry.get(state, chat.id) is not None:
            registry.ensure_chat(state, chat)
            return None
        registry.ensure_chat(state, chat)
        logger.info("channel_added", chat_id=chat.id, title=name, status=status)
        notify_admins(client, admin_ids, f"{name} added to the watch list")
        return "added"

    if status in DEPARTED_STATUSES:
        if not registry.remove(state, chat.id):
            return None
        logger.info("channel_removed", chat_id=chat.id, title=name, status=status)
        notify_admins(client, admin_ids, f"{name} removed from the watch list")
        return "removed"

    logger.debug("membership_status_ignored", chat_id=chat.id, status=status)
    return None
