from fastapi import APIRouter
from api.v1.routes.telegram import router as telegram_router
from api.v1.routes.kick import router as kick_router


# Main v1 router (includes all endpoints)
router = APIRouter()
router.include_router(telegram_router)
router.include_router(kick_router)

# Root level router kept for webhooks registered before the /api/v1 prefix
legacy_router = APIRouter()
legacy_router.include_router(telegram_router)
