"""Error classifiers for Telegram Bot API calls.

Converts transport exceptions and Bot API error bodies into standardized
OperationResult objects so callers never have to inspect `requests` types.

Usage:
    from infrastructure.operations.classifiers import (
        classify_bot_api_response,
        classify_request_exception,
    )

    try:
        response = session.post(url, json=payload, timeout=10)
    except requests.RequestException as exc:
        return classify_request_exception(exc)
    return classify_bot_api_response(response.status_code, response.json())
"""

from typing import Any, Dict, Optional

import requests

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus


def classify_request_exception(exc: Exception) -> OperationResult:
    """Classify a transport level failure.

    Timeouts and connection errors are transient; anything else raised by
    `requests` is treated as permanent.
    """
    if isinstance(exc, (requests.Timeout, requests.ConnectionError)):
        return OperationResult.transient_error(
            f"Connection error: {type(exc).__name__}: {str(exc)}",
            error_code="CONNECTION_ERROR",
        )
    return OperationResult.permanent_error(
        f"Request error: {type(exc).__name__}: {str(exc)}",
        error_code="REQUEST_ERROR",
    )


def classify_bot_api_response(
    status_code: int, body: Optional[Dict[str, Any]]
) -> OperationResult:
    """Classify a Bot API response.

    The Bot API wraps every reply as {"ok": bool, "result": ..., "description": ...}.
    A call succeeds only when the HTTP status is 200 and ok is true.

    Status Code Mapping:
    - 429: Flood control → TRANSIENT_ERROR with retry_after from parameters
    - 401/403: Token rejected or bot lacks rights → UNAUTHORIZED
    - 400 "not found": Chat or user unknown → NOT_FOUND
    - 5xx: Server error → TRANSIENT_ERROR
    - Other: PERMANENT_ERROR
    """
    body = body or {}
    if status_code == 200 and body.get("ok"):
        return OperationResult.success(data=body.get("result"))

    description = body.get("description") or f"HTTP {status_code}"
    error_code = str(body.get("error_code") or status_code)

    if status_code == 429:
        parameters = body.get("parameters") or {}
        retry_after = parameters.get("retry_after")
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            description,
            error_code=error_code,
            retry_after=int(retry_after) if retry_after is not None else None,
        )

    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED, description, error_code=error_code
        )

    if status_code == 400 and "not found" in description.lower():
        return OperationResult.error(
            OperationStatus.NOT_FOUND, description, error_code=error_code
        )

    if status_code >= 500:
        return OperationResult.transient_error(description, error_code=error_code)

    return OperationResult.permanent_error(description, error_code=error_code)
