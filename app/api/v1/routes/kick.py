from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from pydantic import ValidationError

from api.dependencies.rate_limits import KICK_RATE_LIMIT, get_limiter
from core.logging import get_module_logger
from core.security import verify_kick_token
from integrations.telegram import TelegramClient, get_client
from models.kick import KickRequest
from modules.relay import kick
from modules.relay.store import StateUnavailableError, load_state

logger = get_module_logger()
router = APIRouter(tags=["Moderation"])
limiter = get_limiter()


@router.post("/kick", dependencies=[Depends(verify_kick_token)])
@limiter.limit(KICK_RATE_LIMIT)
def kick_user(
    request: Request,
    payload: Any = Body(default=None),
    client: TelegramClient = Depends(get_client),
):
    """Remove a user from every monitored channel.

    Args:
        request (Request): The FastAPI request object.
        payload (Any): {"user_id": <int>}; any other JSON value is rejected.
        client (TelegramClient): Bot API client used for the removals.

    Raises:
        HTTPException: 401 without a valid bearer token, 400 if the body is
            not an object carrying an integer user_id (both raised before
            state is read), 503 if the state cannot be read.

    Returns:
        dict: {total, successCount, failCount, perChannelResults}
    """
    try:
        kick_request = KickRequest.model_validate(
            payload if payload is not None else {}
        )
    except ValidationError as e:
        logger.warning("kick_request_invalid", error=str(e))
        raise HTTPException(status_code=400, detail="user_id is required") from e

    try:
        state = load_state()
    except StateUnavailableError as e:
        logger.error("kick_state_unavailable", error=str(e))
        raise HTTPException(status_code=503, detail="State unavailable") from e

    logger.info("kick_requested", user_id=kick_request.user_id)
    summary = kick(state, kick_request.user_id, client)
    return summary.model_dump(by_alias=True)
