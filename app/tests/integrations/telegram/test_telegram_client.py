import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from infrastructure.operations import OperationResult, OperationStatus
from integrations.telegram import client as telegram_client_module
from integrations.telegram.client import TelegramClient, get_client


def _response(status_code=200, body=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    response.text = text
    return response


@pytest.fixture
def client():
    return TelegramClient("TOKEN", api_url="https://api.example.org/", timeout=3)


def test_call_posts_json_to_method_url(client):
    with patch.object(
        client._session, "post", return_value=_response(body={"ok": True, "result": True})
    ) as mock_post:
        result = client.call("sendMessage", {"chat_id": 1, "text": "hi"})

    assert result.is_success
    mock_post.assert_called_once()
    args, kwargs = mock_post.call_args
    assert args[0] == "https://api.example.org/botTOKEN/sendMessage"
    assert json.loads(kwargs["data"]) == {"chat_id": 1, "text": "hi"}
    assert kwargs["timeout"] == 3


@patch("integrations.telegram.client.logger")
def test_call_returns_error_result_on_api_error(mock_logger, client):
    with patch.object(
        client._session,
        "post",
        return_value=_response(
            403, {"ok": False, "description": "Forbidden: bot was kicked"}
        ),
    ):
        result = client.call("sendMessage", {"chat_id": 1, "text": "hi"})

    assert result.status == OperationStatus.UNAUTHORIZED
    assert result.message == "Forbidden: bot was kicked"
    mock_logger.error.assert_called_once()


@patch("integrations.telegram.client.logger")
def test_call_never_raises_on_transport_error(mock_logger, client):
    with patch.object(
        client._session, "post", side_effect=requests.ConnectionError("down")
    ):
        result = client.call("sendMessage", {"chat_id": 1, "text": "hi"})

    assert result.status == OperationStatus.TRANSIENT_ERROR
    mock_logger.error.assert_called_once()


@patch("integrations.telegram.client.logger")
def test_call_handles_non_json_body(mock_logger, client):
    with patch.object(
        client._session, "post", return_value=_response(502, None, "<html>bad gateway")
    ):
        result = client.call("sendMessage", {"chat_id": 1, "text": "hi"})

    assert result.status == OperationStatus.TRANSIENT_ERROR
    mock_logger.warning.assert_called_once()


def test_send_message_payload(client):
    with patch.object(client, "call", return_value=OperationResult.success()) as mock_call:
        client.send_message(-100, "News 💌 updated")

    mock_call.assert_called_once_with(
        "sendMessage",
        {"chat_id": -100, "text": "News 💌 updated", "disable_notification": False},
    )


def test_send_message_with_keyboard(client):
    keyboard = {"inline_keyboard": []}
    with patch.object(client, "call", return_value=OperationResult.success()) as mock_call:
        client.send_message(1001, "panel", reply_markup=keyboard)

    assert mock_call.call_args[0][1]["reply_markup"] == keyboard


def test_answer_callback_query_defaults(client):
    with patch.object(client, "call", return_value=OperationResult.success()) as mock_call:
        client.answer_callback_query("cb-1")

    mock_call.assert_called_once_with(
        "answerCallbackQuery",
        {"callback_query_id": "cb-1", "text": "", "show_alert": False},
    )


def test_edit_message_reply_markup_payload(client):
    with patch.object(client, "call", return_value=OperationResult.success()) as mock_call:
        client.edit_message_reply_markup(1001, 77, {"inline_keyboard": []})

    mock_call.assert_called_once_with(
        "editMessageReplyMarkup",
        {"chat_id": 1001, "message_id": 77, "reply_markup": {"inline_keyboard": []}},
    )


def test_kick_bans_then_unbans(client):
    with patch.object(client, "call", return_value=OperationResult.success()) as mock_call:
        result = client.kick_chat_member(-100, 555)

    assert result.is_success
    assert [c[0][0] for c in mock_call.call_args_list] == [
        "banChatMember",
        "unbanChatMember",
    ]
    assert mock_call.call_args_list[1][0][1]["only_if_banned"] is True


def test_kick_without_unban(client):
    with patch.object(client, "call", return_value=OperationResult.success()) as mock_call:
        client.kick_chat_member(-100, 555, unban_after=False)

    mock_call.assert_called_once_with("banChatMember", {"chat_id": -100, "user_id": 555})


def test_kick_failed_ban_skips_unban(client):
    failure = OperationResult.permanent_error("Bad Request: not enough rights")
    with patch.object(client, "call", return_value=failure) as mock_call:
        result = client.kick_chat_member(-100, 555)

    assert not result.is_success
    assert mock_call.call_count == 1


@patch("integrations.telegram.client.logger")
def test_kick_failed_unban_still_counts_as_kicked(mock_logger, client):
    with patch.object(
        client,
        "call",
        side_effect=[
            OperationResult.success(),
            OperationResult.permanent_error("unban refused"),
        ],
    ):
        result = client.kick_chat_member(-100, 555)

    assert result.is_success
    mock_logger.warning.assert_called_once()


def test_get_client_uses_settings(monkeypatch):
    settings = telegram_client_module.settings
    monkeypatch.setattr(settings.telegram, "BOT_TOKEN", "abc")
    monkeypatch.setattr(settings.telegram, "API_URL", "http://localhost:8081")
    monkeypatch.setattr(settings.telegram, "TIMEOUT_SECONDS", 4)

    client = get_client()

    assert client.token == "abc"
    assert client.api_url == "http://localhost:8081"
    assert client.timeout == 4
