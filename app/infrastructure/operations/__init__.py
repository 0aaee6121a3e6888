"""Operation result types and status enums.

Standardized result types for collaborator calls, including the status enum,
the result dataclass and classifiers for Telegram Bot API failures.
"""

from infrastructure.operations.classifiers import (
    classify_bot_api_response,
    classify_request_exception,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_bot_api_response",
    "classify_request_exception",
]
