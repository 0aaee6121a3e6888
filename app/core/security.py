"""Credential checks for the HTTP entry points."""

import hmac
from typing import Optional

from fastapi import Header, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import settings
from core.logging import get_module_logger

logger = get_module_logger()
security = HTTPBearer(auto_error=False)


def _matches(expected: str, provided: Optional[str]) -> bool:
    if not expected or not provided:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), provided.encode("utf-8"))


def verify_kick_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> str:
    """Require `Authorization: Bearer <KICK_API_TOKEN>`.

    When no token is configured every request is refused.

    Raises:
        HTTPException: 401 if the credential is absent or does not match.
    """
    if credentials is None:
        logger.warning("kick_credential_missing")
        raise HTTPException(status_code=401, detail="Missing credentials")
    if not _matches(settings.server.KICK_API_TOKEN, credentials.credentials):
        logger.warning("kick_credential_invalid")
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return credentials.credentials


def verify_telegram_secret(
    x_telegram_bot_api_secret_token: Optional[str] = Header(default=None),
) -> None:
    """Check the secret token Telegram echoes on every webhook delivery.

    Only enforced when TELEGRAM_WEBHOOK_SECRET is configured.

    Raises:
        HTTPException: 401 if the header does not match.
    """
    expected = settings.telegram.WEBHOOK_SECRET
    if not expected:
        return
    if not _matches(expected, x_telegram_bot_api_secret_token):
        logger.warning("telegram_webhook_secret_mismatch")
        raise HTTPException(status_code=401, detail="Invalid secret token")
