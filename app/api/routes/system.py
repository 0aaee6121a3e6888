from fastapi import APIRouter, Request
from core.config import settings
from api.dependencies.rate_limits import SYSTEM_RATE_LIMIT, get_limiter

router = APIRouter(tags=["System"])
limiter = get_limiter()


@router.get("/version")
@limiter.limit(SYSTEM_RATE_LIMIT)
def get_version(request: Request):  # pylint: disable=unused-argument
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
@limiter.limit(SYSTEM_RATE_LIMIT)
def get_health(request: Request):  # pylint: disable=unused-argument
    """Healthcheck endpoint, also reports whether the relay is configured."""
    return {
        "status": "ok",
        "telegram_configured": bool(settings.telegram.BOT_TOKEN),
        "target_configured": settings.telegram.TARGET_CHAT_ID is not None,
    }
