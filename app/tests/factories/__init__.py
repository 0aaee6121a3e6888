"""Test data factories for deterministic test data generation."""

from tests.factories.telegram import (
    ADMIN_ID,
    OUTSIDER_ID,
    TARGET_CHAT_ID,
    make_callback_update_dict,
    make_chat_dict,
    make_membership_update_dict,
    make_post_update_dict,
    make_private_message_dict,
    make_state,
    make_update,
    make_user_dict,
)

__all__ = [
    "ADMIN_ID",
    "OUTSIDER_ID",
    "TARGET_CHAT_ID",
    "make_callback_update_dict",
    "make_chat_dict",
    "make_membership_update_dict",
    "make_post_update_dict",
    "make_private_message_dict",
    "make_state",
    "make_update",
    "make_user_dict",
]
