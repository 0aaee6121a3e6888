from fastapi import APIRouter, Request, Depends
from api.routes.system import router as system_router
from api.v1.router import router as v1_router, legacy_router
from core.logging import get_module_logger

logger = get_module_logger()
api_router = APIRouter()


def log_legacy_calls(request: Request):
    """Log a warning when a webhook is delivered to the unprefixed path."""
    logger.warning(
        "legacy_api_endpoint_accessed",
        path=request.url.path,
        method=request.method,
        ip_address=request.client.host if request.client else "unknown",
        user_agent=request.headers.get("user-agent"),
    )


api_router.include_router(system_router)
api_router.include_router(legacy_router, dependencies=[Depends(log_legacy_calls)])
api_router.include_router(v1_router, prefix="/api/v1")
