from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from core.config import Settings, settings
from core.logging import get_module_logger


def _list_configs(settings: Settings, logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def _check_relay_configuration(settings: Settings, logger: BoundLogger) -> None:
    if not settings.telegram.BOT_TOKEN:
        logger.warning("telegram_bot_token_missing")
    if settings.telegram.TARGET_CHAT_ID is None:
        logger.warning("target_chat_id_missing")
    if not settings.telegram.admin_ids:
        logger.warning("admin_ids_empty")
    if not settings.server.KICK_API_TOKEN:
        logger.warning("kick_api_token_missing")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger = get_module_logger()
    logger.info("application_startup")
    _list_configs(settings, logger)
    _check_relay_configuration(settings, logger)
    app.state.admin_count = len(settings.telegram.admin_ids)
    yield
    logger.info("application_shutdown")
