import json
from typing import Any, Dict, Union

from fastapi import APIRouter, Body, Depends, Request
from pydantic import ValidationError

from api.dependencies.rate_limits import WEBHOOK_RATE_LIMIT, get_limiter
from core.logging import get_module_logger
from core.security import verify_telegram_secret
from integrations.telegram import TelegramClient, get_client
from models.telegram import Update
from modules.relay import handle_update

logger = get_module_logger()
router = APIRouter(tags=["Telegram"])
limiter = get_limiter()


@router.post("/telegram/webhook", dependencies=[Depends(verify_telegram_secret)])
@limiter.limit(WEBHOOK_RATE_LIMIT)
def telegram_webhook(
    request: Request,
    payload: Union[Dict[Any, Any], str] = Body(...),
    client: TelegramClient = Depends(get_client),
):
    """Receive one Telegram update.

    Every accepted delivery is acknowledged with {"ok": true}, including
    updates that cannot be parsed or fail while being handled, so Telegram
    never re-delivers them.

    Args:
        request (Request): The incoming HTTP request.
        payload (Union[Dict[Any, Any], str]): The update, as a dictionary or a JSON string.
        client (TelegramClient): Bot API client used for replies and notifications.

    Returns:
        dict: {"ok": True}
    """
    if isinstance(payload, dict):
        payload_dict = payload
    else:
        try:
            payload_dict = json.loads(payload)
        except json.JSONDecodeError as e:
            logger.error("update_decode_error", error=str(e))
            return {"ok": True}

    try:
        update = Update.model_validate(payload_dict)
    except ValidationError as e:
        logger.warning("update_validation_error", error=str(e))
        return {"ok": True}

    try:
        handle_update(update, client)
    except Exception as e:
        logger.exception("update_processing_failed", update_id=update.update_id, error=str(e))

    return {"ok": True}
