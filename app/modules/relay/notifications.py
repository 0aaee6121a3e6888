"""Fire-and-forget broadcast to the administrators."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Iterable

from core.config import settings
from core.logging import get_module_logger
from integrations.telegram import TelegramClient

logger = get_module_logger()


def notify_admins(
    client: TelegramClient, admin_ids: Iterable[int], text: str
) -> Dict[int, bool]:
    """Send text to every administrator in parallel.

    One failed delivery never prevents the others. Nothing is raised.

    Returns:
        Mapping of admin id to whether the message was delivered.
    """
    admin_ids = list(admin_ids)
    if not admin_ids:
        return {}

    delivered: Dict[int, bool] = {}
    max_workers = max(1, min(settings.relay.NOTIFY_MAX_WORKERS, len(admin_ids)))
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_admin = {
            executor.submit(client.send_message, admin_id, text): admin_id
            for admin_id in admin_ids
        }
        for future in as_completed(future_to_admin):
            admin_id = future_to_admin[future]
            try:
                delivered[admin_id] = future.result().is_success
            except Exception as error:
                logger.warning(
                    "admin_notification_failed", admin_id=admin_id, error=str(error)
                )
                delivered[admin_id] = False

    logger.info(
        "admins_notified",
        requested=len(admin_ids),
        delivered=sum(1 for ok in delivered.values() if ok),
    )
    return delivered
