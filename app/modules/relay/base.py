"""Per-update processing cycle.

classify -> (authorize) -> load state -> handle -> save state
"""

import time
from typing import Optional

from core.config import settings
from core.logging import bind_request_context, get_module_logger
from integrations.telegram import TelegramClient
from models.events import (
    ContentPosted,
    InteractiveAction,
    MembershipChanged,
    classify_update,
)
from models.telegram import Update
from modules.relay import control_panel, store
from modules.relay.membership import handle_membership_changed
from modules.relay.message_router import handle_content_posted
from modules.relay.store import StateUnavailableError

logger = get_module_logger()


def now_millis() -> int:
    return int(time.time() * 1000)


def handle_update(
    update: Update,
    client: TelegramClient,
    now_ms: Optional[int] = None,
) -> Optional[str]:
    """Process one Telegram update end to end.

    Returns:
        The name of the event kind handled, "denied" for a refused button
        press, or None when the update was ignored or the state could not
        be read. Nothing is saved in either of the last two cases.
    """
    event = classify_update(update)
    if event is None:
        logger.debug("update_ignored", update_id=update.update_id)
        return None

    kind = type(event).__name__
    with bind_request_context(correlation_id=str(update.update_id), event_kind=kind):
        admin_ids = settings.telegram.admin_ids
        target_chat_id = settings.telegram.TARGET_CHAT_ID

        # Refused before the state is even read, so nothing can change
        if isinstance(event, InteractiveAction) and event.actor.id not in admin_ids:
            control_panel.deny_interactive_action(event, client)
            return "denied"

        try:
            state = store.load_state()
        except StateUnavailableError as e:
            logger.error("update_dropped_state_unavailable", error=str(e))
            return None

        if isinstance(event, MembershipChanged):
            handle_membership_changed(event, state, client, admin_ids, target_chat_id)
        elif isinstance(event, InteractiveAction):
            control_panel.handle_interactive_action(event, state, client)
        elif isinstance(event, ContentPosted):
            handle_content_posted(
                event,
                state,
                client,
                admin_ids,
                target_chat_id,
                now_ms if now_ms is not None else now_millis(),
            )

        store.save_state(state)
        return kind
