"""Duplicate suppression for grouped posts (albums).

Every part of an album arrives as its own update sharing one media_group_id;
only the first part inside the window produces a notification.
"""

from typing import Optional

from models.state import ChannelRecord

DEFAULT_WINDOW_MS = 10 * 60 * 1000


def should_suppress(
    record: ChannelRecord,
    group_id: Optional[str],
    now_ms: int,
    window_ms: int = DEFAULT_WINDOW_MS,
) -> bool:
    if group_id is None:
        return False
    return (
        record.last_group_id == group_id
        and now_ms - record.last_group_timestamp < window_ms
    )


def mark_seen(record: ChannelRecord, group_id: str, now_ms: int) -> None:
    record.last_group_id = group_id
    # The timestamp never moves backwards
    record.last_group_timestamp = max(record.last_group_timestamp, now_ms)


def check_and_mark(
    record: ChannelRecord,
    group_id: Optional[str],
    now_ms: int,
    window_ms: int = DEFAULT_WINDOW_MS,
) -> bool:
    """Run the gate and record the group as seen when it passes.

    Returns:
        True if the event is a duplicate and must be dropped.
    """
    if should_suppress(record, group_id, now_ms, window_ms):
        return True
    if group_id is not None:
        mark_seen(record, group_id, now_ms)
    return False
