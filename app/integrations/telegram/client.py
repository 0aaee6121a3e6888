"""Telegram Bot API client.

Every call is a single bounded POST to https://api.telegram.org/bot<token>/<method>.
Nothing is retried here and nothing is raised: each call returns an
OperationResult and failures are logged.

Usage:
    from integrations.telegram import get_client

    client = get_client()
    result = client.send_message(chat_id=-1001234567890, text="News 💌 updated")
    if not result.is_success:
        ...
"""

import json
from typing import Any, Dict, Optional

import requests

from core.config import settings
from core.logging import get_module_logger
from infrastructure.operations import (
    OperationResult,
    classify_bot_api_response,
    classify_request_exception,
)

logger = get_module_logger()


class TelegramClient:
    """Thin Bot API wrapper with connection pooling.

    Attributes:
        token: Bot token issued by BotFather
        api_url: Base URL of the Bot API server
        timeout: Per request timeout in seconds
    """

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.telegram.org",
        timeout: int = 10,
    ) -> None:
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    def call(self, method: str, payload: Dict[str, Any]) -> OperationResult:
        """Invoke a Bot API method.

        Args:
            method: Bot API method name, e.g. "sendMessage"
            payload: JSON parameters for the method

        Returns:
            OperationResult whose data is the Bot API `result` on success
        """
        url = f"{self.api_url}/bot{self.token}/{method}"
        try:
            response = self._session.post(
                url, data=json.dumps(payload), timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error("telegram_api_request_failed", method=method, error=str(e))
            return classify_request_exception(e)

        body: Optional[Dict[str, Any]] = None
        try:
            body = response.json()
        except ValueError:
            logger.warning(
                "telegram_api_non_json_response",
                method=method,
                status_code=response.status_code,
                content=response.text[:200],
            )

        result = classify_bot_api_response(response.status_code, body)
        if not result.is_success:
            logger.error(
                "telegram_api_error",
                method=method,
                status_code=response.status_code,
                error=result.message,
            )
        return result

    def send_message(
        self,
        chat_id: int,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None,
        disable_notification: bool = False,
    ) -> OperationResult:
        payload: Dict[str, Any] = {
            "chat_id": chat_id,
            "text": text,
            "disable_notification": disable_notification,
        }
        if reply_markup is not None:
            payload["reply_markup"] = reply_markup
        return self.call("sendMessage", payload)

    def edit_message_reply_markup(
        self, chat_id: int, message_id: int, reply_markup: Dict[str, Any]
    ) -> OperationResult:
        return self.call(
            "editMessageReplyMarkup",
            {"chat_id": chat_id, "message_id": message_id, "reply_markup": reply_markup},
        )

    def answer_callback_query(
        self, callback_query_id: str, text: str = "", show_alert: bool = False
    ) -> OperationResult:
        return self.call(
            "answerCallbackQuery",
            {
                "callback_query_id": callback_query_id,
                "text": text,
                "show_alert": show_alert,
            },
        )

    def ban_chat_member(self, chat_id: int, user_id: int) -> OperationResult:
        return self.call("banChatMember", {"chat_id": chat_id, "user_id": user_id})

    def unban_chat_member(
        self, chat_id: int, user_id: int, only_if_banned: bool = True
    ) -> OperationResult:
        return self.call(
            "unbanChatMember",
            {"chat_id": chat_id, "user_id": user_id, "only_if_banned": only_if_banned},
        )

    def kick_chat_member(
        self, chat_id: int, user_id: int, unban_after: bool = True
    ) -> OperationResult:
        """Remove a user from a chat.

        The ban decides the outcome. When unban_after is set the ban is lifted
        again so the user can come back through an invite link; a failed unban
        is logged but does not turn the kick into a failure.
        """
        result = self.ban_chat_member(chat_id, user_id)
        if result.is_success and unban_after:
            unban = self.unban_chat_member(chat_id, user_id, only_if_banned=True)
            if not unban.is_success:
                logger.warning(
                    "unban_after_kick_failed",
                    chat_id=chat_id,
                    user_id=user_id,
                    error=unban.message,
                )
        return result


def get_client() -> TelegramClient:
    """Build a client from the configured Telegram settings."""
    return TelegramClient(
        token=settings.telegram.BOT_TOKEN,
        api_url=settings.telegram.API_URL,
        timeout=settings.telegram.TIMEOUT_SECONDS,
    )
