"""Shared boto3 plumbing for the relay's AWS calls."""

from functools import wraps

import boto3  # type: ignore
from botocore.exceptions import BotoCoreError, ClientError  # type: ignore
from core.config import settings
from core.logging import get_module_logger

logger = get_module_logger()

AWS_REGION = settings.aws.AWS_REGION
THROTTLING_ERRORS = settings.aws.THROTTLING_ERRS


class AwsCallFailed(Exception):
    """An AWS call completed with a non-200 status."""


def handle_aws_api_errors(func):
    """Decorator turning AWS failures into a False return value.

    Callers can then tell a failed call (False) apart from an empty
    result (None). Throttling is logged at warning level since the next
    update usually succeeds; everything else is an error.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in THROTTLING_ERRORS:
                logger.warning(
                    "aws_throttled", function=func.__name__, code=code, error=str(e)
                )
            else:
                logger.error(
                    "aws_client_error", function=func.__name__, code=code, error=str(e)
                )
        except (BotoCoreError, AwsCallFailed) as e:
            logger.error("aws_call_failed", function=func.__name__, error=str(e))
        return False

    return wrapper


def get_aws_service_client(service_name, endpoint_url=None):
    """Build a client for service_name in the configured region.

    endpoint_url points the client at a local emulator when set.
    """
    session = boto3.Session(region_name=AWS_REGION)
    if endpoint_url:
        return session.client(service_name, endpoint_url=endpoint_url)
    return session.client(service_name)


def execute_aws_api_call(service_name, method, endpoint_url=None, **params):
    """Call method on a fresh service client with the given API parameters.

    Raises:
        AwsCallFailed: If the response status code is not 200.
    """
    client = get_aws_service_client(service_name, endpoint_url=endpoint_url)
    response = getattr(client, method)(**params)

    status_code = response.get("ResponseMetadata", {}).get("HTTPStatusCode", 200)
    if status_code != 200:
        raise AwsCallFailed(
            f"{service_name}.{method} failed with status code {status_code}"
        )
    return response
