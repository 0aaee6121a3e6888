"""Administrator control panel: status text plus inline toggle buttons.

Callback data on the buttons is either "toggle:global" or "toggle:<chat id>".
"""

from typing import Any, Dict, List, Optional, Tuple

from core.config import settings
from core.logging import get_module_logger
from integrations.telegram import TelegramClient
from models.events import InteractiveAction
from models.state import RelayState

logger = get_module_logger()

TOGGLE_PREFIX = "toggle:"
GLOBAL_TOGGLE = "toggle:global"

PAUSED_ICON = "⏸️"
RUNNING_ICON = "▶️"

DENIED_MESSAGE = "Not authorized"
NOT_FOUND_MESSAGE = "Channel not found"


def build_keyboard(state: RelayState, label_budget: Optional[int] = None) -> Dict[str, Any]:
    """Inline keyboard: one global toggle row, then one row per channel.

    A button shows the action it performs, so a muted channel carries the
    resume icon.
    """
    if label_budget is None:
        label_budget = settings.relay.PANEL_LABEL_BUDGET

    rows: List[List[Dict[str, str]]] = [
        [
            {
                "text": f"{RUNNING_ICON} Resume all"
                if state.global_muted
                else f"{PAUSED_ICON} Pause all",
                "callback_data": GLOBAL_TOGGLE,
            }
        ]
    ]
    for chat_id, record in state.channels.items():
        icon = RUNNING_ICON if record.muted else PAUSED_ICON
        rows.append(
            [
                {
                    "text": f"{icon} {record.title}"[:label_budget],
                    "callback_data": f"{TOGGLE_PREFIX}{chat_id}",
                }
            ]
        )
    return {"inline_keyboard": rows}


def render_status(state: RelayState) -> str:
    lines = [
        "Global status: "
        + (f"{PAUSED_ICON} Paused" if state.global_muted else f"{RUNNING_ICON} Running")
    ]
    if not state.channels:
        lines.append("No channels or groups joined yet.")
    else:
        lines.append("Channels:")
        for chat_id, record in state.channels.items():
            icon = PAUSED_ICON if record.muted else RUNNING_ICON
            lines.append(f"- {icon} {record.title} ({chat_id})")
    return "\n".join(lines)


def render_panel(state: RelayState) -> Tuple[str, Dict[str, Any]]:
    return render_status(state), build_keyboard(state)


def send_panel(client: TelegramClient, chat_id: int, state: RelayState) -> None:
    text, keyboard = render_panel(state)
    client.send_message(chat_id, text, reply_markup=keyboard)
    logger.info("control_panel_sent", chat_id=chat_id, channels=len(state.channels))


def _parse_channel_id(action_tag: str) -> Optional[int]:
    try:
        return int(action_tag[len(TOGGLE_PREFIX) :])
    except ValueError:
        return None


def apply_toggle(state: RelayState, action_tag: str) -> Optional[str]:
    """Flip the mute flag named by action_tag.

    Returns:
        The confirmation text for the administrator, NOT_FOUND_MESSAGE for an
        unknown channel, or None when the tag is not a toggle at all.
    """
    if action_tag == GLOBAL_TOGGLE:
        state.global_muted = not state.global_muted
        logger.info("global_mute_toggled", muted=state.global_muted)
        return "Paused all" if state.global_muted else "Resumed all"

    if not action_tag.startswith(TOGGLE_PREFIX):
        return None

    chat_id = _parse_channel_id(action_tag)
    record = state.channels.get(chat_id) if chat_id is not None else None
    if record is None:
        logger.info("toggle_channel_not_found", action_tag=action_tag)
        return NOT_FOUND_MESSAGE

    record.muted = not record.muted
    logger.info("channel_mute_toggled", chat_id=chat_id, muted=record.muted)
    return "Channel paused" if record.muted else "Channel resumed"


def refresh_panel(
    client: TelegramClient, action: InteractiveAction, state: RelayState
) -> bool:
    """Push the current buttons back onto the message that was pressed.

    Skipped when the callback carries no message reference.
    """
    if action.origin_chat_id is None or action.origin_message_id is None:
        logger.info("control_panel_refresh_skipped", callback_id=action.callback_id)
        return False
    result = client.edit_message_reply_markup(
        action.origin_chat_id, action.origin_message_id, build_keyboard(state)
    )
    return result.is_success


def handle_interactive_action(
    action: InteractiveAction, state: RelayState, client: TelegramClient
) -> Optional[str]:
    """Apply a button press from an administrator and refresh the panel.

    The caller has already checked that the actor is an administrator.
    """
    outcome = apply_toggle(state, action.action_tag)
    if outcome is None:
        logger.info("unknown_action_tag", action_tag=action.action_tag)
        client.answer_callback_query(action.callback_id)
        return None

    client.answer_callback_query(action.callback_id, outcome)
    refresh_panel(client, action, state)
    return outcome


def deny_interactive_action(action: InteractiveAction, client: TelegramClient) -> None:
    logger.warning(
        "interactive_action_denied",
        actor_id=action.actor.id,
        action_tag=action.action_tag,
    )
    client.answer_callback_query(action.callback_id, DENIED_MESSAGE)
