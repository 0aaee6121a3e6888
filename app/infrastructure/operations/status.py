"""Operation status enumeration."""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for collaborator call results.

    Attributes:
        SUCCESS: Call completed and the Bot API reported ok
        TRANSIENT_ERROR: Network failure, timeout, flood control or 5xx
        PERMANENT_ERROR: Rejected request (bad parameters, unknown method)
        UNAUTHORIZED: Token rejected or the bot lacks rights in the chat
        NOT_FOUND: Chat or user unknown to Telegram
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
