from core.logging import get_module_logger
from fastapi import FastAPI

from api.router import api_router
from api.dependencies.rate_limits import setup_rate_limiter, get_limiter
from server.lifespan import lifespan

logger = get_module_logger()


handler = FastAPI(title="Channel relay bot", lifespan=lifespan)
setup_rate_limiter(handler)
limiter = get_limiter()


handler.include_router(api_router)
