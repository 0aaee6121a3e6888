"""DynamoDB access for the single relay state item.

Both calls return False when DynamoDB could not be reached or refused the
request, so a failed read is never mistaken for an absent item.
"""

from typing import Any, Dict, Optional, Union

from core.config import settings
from core.logging import get_module_logger
from integrations.aws.client import execute_aws_api_call, handle_aws_api_errors

logger = get_module_logger()

Item = Dict[str, Dict[str, Any]]

LOCAL_ENDPOINT = "http://dynamodb-local:8000"


def _endpoint_url() -> Optional[str]:
    return LOCAL_ENDPOINT if settings.PREFIX else None


@handle_aws_api_errors
def get_item(table_name: str, key: Item) -> Union[Item, None, bool]:
    """Strongly consistent read of one item.

    Returns:
        The item attributes, None when no item exists under key, or False
        when the read failed.
    """
    response = execute_aws_api_call(
        "dynamodb",
        "get_item",
        endpoint_url=_endpoint_url(),
        TableName=table_name,
        Key=key,
        ConsistentRead=True,
    )
    item = response.get("Item")
    logger.debug("dynamodb_item_read", table=table_name, found=item is not None)
    return item


@handle_aws_api_errors
def put_item(table_name: str, item: Item) -> bool:
    """Replace the item stored under item's key. False when the write failed."""
    execute_aws_api_call(
        "dynamodb",
        "put_item",
        endpoint_url=_endpoint_url(),
        TableName=table_name,
        Item=item,
    )
    logger.debug("dynamodb_item_written", table=table_name)
    return True
