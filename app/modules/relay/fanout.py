"""Removal of one user from every monitored channel."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional

from core.config import settings
from core.logging import get_module_logger
from integrations.telegram import TelegramClient
from models.kick import KickChannelResult, KickSummary
from models.state import RelayState

logger = get_module_logger()


def _kick_one(
    client: TelegramClient, chat_id: int, title: str, user_id: int, unban_after: bool
) -> KickChannelResult:
    result = client.kick_chat_member(chat_id, user_id, unban_after=unban_after)
    return KickChannelResult(
        chat_id=chat_id,
        title=title,
        success=result.is_success,
        error=None if result.is_success else result.message,
    )


def kick(
    state: RelayState,
    user_id: int,
    client: TelegramClient,
    max_workers: Optional[int] = None,
    unban_after: Optional[bool] = None,
) -> KickSummary:
    """Remove user_id from every channel in the registry.

    One removal per channel runs in parallel; every outcome is collected, a
    failure never cancels the others. The registry is only read.
    """
    if max_workers is None:
        max_workers = settings.relay.KICK_MAX_WORKERS
    if unban_after is None:
        unban_after = settings.relay.KICK_UNBAN_AFTER

    # Titles come from this snapshot, not from Telegram
    targets = [(chat_id, record.title) for chat_id, record in state.channels.items()]
    if not targets:
        logger.info("kick_skipped_no_channels", user_id=user_id)
        return KickSummary()

    results: List[KickChannelResult] = []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(targets)))) as executor:
        future_to_target = {
            executor.submit(_kick_one, client, chat_id, title, user_id, unban_after): (
                chat_id,
                title,
            )
            for chat_id, title in targets
        }
        for future in as_completed(future_to_target):
            chat_id, title = future_to_target[future]
            try:
                results.append(future.result())
            except Exception as error:
                logger.warning(
                    "kick_channel_error", chat_id=chat_id, user_id=user_id, error=str(error)
                )
                results.append(
                    KickChannelResult(
                        chat_id=chat_id, title=title, success=False, error=str(error)
                    )
                )

    success_count = sum(1 for r in results if r.success)
    summary = KickSummary(
        total=len(results),
        success_count=success_count,
        fail_count=len(results) - success_count,
        per_channel_results=results,
    )
    logger.info(
        "kick_completed",
        user_id=user_id,
        total=summary.total,
        success_count=summary.success_count,
        fail_count=summary.fail_count,
    )
    return summary
