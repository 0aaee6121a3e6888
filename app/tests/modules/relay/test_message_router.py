from unittest.mock import patch

import pytest

from infrastructure.operations import OperationResult
from models.events import ContentPosted
from models.state import RelayState
from models.telegram import Chat, User
from modules.relay.message_router import handle_content_posted, notification_text
from tests.factories import ADMIN_ID, OUTSIDER_ID, TARGET_CHAT_ID, make_state

ADMINS = frozenset({ADMIN_ID})
WINDOW = 600000


@pytest.fixture(autouse=True)
def _settings(relay_settings):
    return relay_settings


def _post(chat_id=42, chat_type="channel", title="News", group_id=None, sender_id=None):
    return ContentPosted(
        chat=Chat(id=chat_id, type=chat_type, title=title),
        sender=User(id=sender_id) if sender_id is not None else None,
        group_id=group_id,
    )


def _handle(event, state, client, now_ms=1_000_000, target=TARGET_CHAT_ID):
    return handle_content_posted(event, state, client, ADMINS, target, now_ms)


def test_notification_text_format():
    assert notification_text("News", "💌 updated") == "News 💌 updated"


def test_standalone_post_sends_one_notification(telegram_client):
    state = make_state({42: "News"})

    assert _handle(_post(), state, telegram_client) is True

    telegram_client.send_message.assert_called_once_with(
        TARGET_CHAT_ID, "News 💌 updated"
    )


def test_notification_uses_refreshed_title(telegram_client):
    state = make_state({42: "Old"})

    _handle(_post(title="Renamed"), state, telegram_client)

    telegram_client.send_message.assert_called_once_with(
        TARGET_CHAT_ID, "Renamed 💌 updated"
    )


@patch("modules.relay.message_router.control_panel.send_panel")
def test_private_message_from_admin_opens_panel(mock_send_panel, telegram_client):
    state = make_state({42: "News"})

    sent = _handle(
        _post(chat_id=ADMIN_ID, chat_type="private", title=None, sender_id=ADMIN_ID),
        state,
        telegram_client,
    )

    assert sent is False
    mock_send_panel.assert_called_once_with(telegram_client, ADMIN_ID, state)
    telegram_client.send_message.assert_not_called()


@patch("modules.relay.message_router.control_panel.send_panel")
def test_private_message_from_outsider_is_dropped(mock_send_panel, telegram_client):
    state = RelayState()

    sent = _handle(
        _post(chat_id=OUTSIDER_ID, chat_type="private", sender_id=OUTSIDER_ID),
        state,
        telegram_client,
    )

    assert sent is False
    mock_send_panel.assert_not_called()
    assert state.channels == {}


@pytest.mark.parametrize("chat_type", ["group", "supergroup", "channel"])
def test_eligible_chat_types(chat_type, telegram_client):
    state = RelayState()

    assert _handle(_post(chat_type=chat_type), state, telegram_client) is True


def test_other_chat_types_are_dropped(telegram_client):
    state = RelayState()

    assert _handle(_post(chat_type="sender"), state, telegram_client) is False
    assert state.channels == {}
    telegram_client.send_message.assert_not_called()


def test_target_chat_is_never_a_source(telegram_client):
    state = RelayState()

    assert _handle(_post(chat_id=TARGET_CHAT_ID), state, telegram_client) is False
    assert TARGET_CHAT_ID not in state.channels
    telegram_client.send_message.assert_not_called()


def test_unknown_chat_is_registered_on_first_post(telegram_client):
    state = RelayState()

    _handle(_post(chat_id=77, title="Fresh"), state, telegram_client)

    assert state.channels[77].title == "Fresh"
    assert state.channels[77].muted is False


def test_global_mute_drops_but_still_tracks_album(telegram_client):
    state = make_state({42: "News"}, global_muted=True)

    assert _handle(_post(group_id="album"), state, telegram_client, now_ms=5000) is False

    telegram_client.send_message.assert_not_called()
    assert state.channels[42].last_group_id == "album"
    assert state.channels[42].last_group_timestamp == 5000


def test_channel_mute_drops(telegram_client):
    state = make_state({42: "News"})
    state.channels[42].muted = True

    assert _handle(_post(), state, telegram_client) is False
    telegram_client.send_message.assert_not_called()


def test_album_parts_inside_window_notify_once(telegram_client):
    state = make_state({42: "News"})

    first = _handle(_post(group_id="album"), state, telegram_client, now_ms=1000)
    second = _handle(_post(group_id="album"), state, telegram_client, now_ms=1000 + WINDOW - 1)

    assert (first, second) == (True, False)
    assert telegram_client.send_message.call_count == 1


def test_album_repeat_after_window_notifies_again(telegram_client):
    state = make_state({42: "News"})

    _handle(_post(group_id="album"), state, telegram_client, now_ms=1000)
    _handle(_post(group_id="album"), state, telegram_client, now_ms=1000 + WINDOW)

    assert telegram_client.send_message.call_count == 2


def test_album_seen_while_muted_is_suppressed_after_unmute(telegram_client):
    state = make_state({42: "News"}, global_muted=True)
    _handle(_post(group_id="album"), state, telegram_client, now_ms=1000)

    state.global_muted = False
    sent = _handle(_post(group_id="album"), state, telegram_client, now_ms=2000)

    assert sent is False
    telegram_client.send_message.assert_not_called()


def test_missing_target_sends_nothing(telegram_client):
    state = make_state({42: "News"})

    assert _handle(_post(), state, telegram_client, target=None) is False
    telegram_client.send_message.assert_not_called()


def test_delivery_failure_is_not_retried(telegram_client):
    telegram_client.send_message.return_value = OperationResult.transient_error("timeout")
    state = make_state({42: "News"})

    assert _handle(_post(), state, telegram_client) is False
    assert telegram_client.send_message.call_count == 1
