"""Rate limiting for the HTTP entry points."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

# Telegram delivers every update from a small pool of addresses, so the
# webhook limit has to cover the busiest minute of all monitored chats together.
WEBHOOK_RATE_LIMIT = "600/minute"
KICK_RATE_LIMIT = "10/minute"
SYSTEM_RATE_LIMIT = "50/minute"

limiter = Limiter(
    key_func=get_remote_address,
)


async def rate_limit_handler(_request: Request, exc: Exception):
    """Return 429 with a fixed message when a limit is exceeded."""
    if isinstance(exc, RateLimitExceeded):
        return JSONResponse(
            status_code=429,
            content={"message": "Rate limit exceeded"},
        )


def setup_rate_limiter(app: FastAPI):
    """Attach the shared limiter and its 429 handler to an application."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


def get_limiter():
    return limiter
