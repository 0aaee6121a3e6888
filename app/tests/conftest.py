from unittest.mock import MagicMock

import pytest

from api.dependencies.rate_limits import get_limiter
from core.config import settings
from infrastructure.operations import OperationResult
from integrations.telegram import TelegramClient
from tests.factories import ADMIN_ID, TARGET_CHAT_ID


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """The limiter keeps counters in memory for the whole test session."""
    get_limiter().reset()
    yield
    get_limiter().reset()


@pytest.fixture
def relay_settings(monkeypatch):
    """Configure one administrator and a target chat for the relay."""
    monkeypatch.setattr(settings.telegram, "ADMIN_IDS", str(ADMIN_ID))
    monkeypatch.setattr(settings.telegram, "TARGET_CHAT_ID", TARGET_CHAT_ID)
    monkeypatch.setattr(settings.telegram, "WEBHOOK_SECRET", "")
    monkeypatch.setattr(settings.relay, "DEDUP_WINDOW_MS", 600000)
    monkeypatch.setattr(settings.relay, "UPDATE_MARKER", "💌 updated")
    return settings


@pytest.fixture
def telegram_client():
    """A TelegramClient double whose every call succeeds."""
    client = MagicMock(spec=TelegramClient)
    ok = OperationResult.success(data=True)
    client.send_message.return_value = ok
    client.edit_message_reply_markup.return_value = ok
    client.answer_callback_query.return_value = ok
    client.kick_chat_member.return_value = ok
    return client
