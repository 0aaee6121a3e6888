"""Load and save of the relay state blob.

The whole state lives in a single DynamoDB item keyed by a version tag:

    {"id": {"S": "state:v1"}, "state": {"S": "<json>"}}

Every update handled loads the item fresh and writes it back once. There is
no locking: two updates processed at the same time race and the last write
wins.
"""

from typing import Optional

from pydantic import ValidationError

from core.config import settings
from core.logging import get_module_logger
from integrations.aws import dynamodb
from models.state import RelayState

logger = get_module_logger()


class StateUnavailableError(Exception):
    """The state item could not be read, so nothing may be written back."""


def _key(state_key: Optional[str] = None) -> dict:
    return {"id": {"S": state_key or settings.persistence.STATE_KEY}}


def load_state(state_key: Optional[str] = None) -> RelayState:
    """Read the persisted state.

    A missing item or an unreadable blob yields fresh defaults.

    Raises:
        StateUnavailableError: If DynamoDB could not be read. Defaults are
            not returned in that case since saving them would erase the
            stored registry.
    """
    item = dynamodb.get_item(settings.persistence.STATE_TABLE, _key(state_key))
    if item is False:
        raise StateUnavailableError(
            f"could not read {settings.persistence.STATE_TABLE}"
        )
    if not item:
        return RelayState()

    raw = item.get("state", {}).get("S")
    if not raw:
        return RelayState()

    try:
        return RelayState.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("relay_state_unreadable", error=str(e))
        return RelayState()


def save_state(state: RelayState, state_key: Optional[str] = None) -> bool:
    """Write the state back.

    Returns:
        True on success. A failure is logged and the mutation is lost.
    """
    item = _key(state_key)
    item["state"] = {"S": state.to_json()}
    if dynamodb.put_item(settings.persistence.STATE_TABLE, item) is False:
        logger.error("relay_state_save_failed", channels=len(state.channels))
        return False
    return True
