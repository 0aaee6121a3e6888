from typing import Any, Callable, Dict, Optional

import httpx
from fastapi import FastAPI


def create_test_app(
    routers, dependency_overrides: Optional[Dict[Callable, Callable[..., Any]]] = None
) -> FastAPI:
    """
    Create a FastAPI test application with the given routers.

    Args:
        routers: A router or a list of routers to include in the app.
        dependency_overrides: Optional mapping of dependency to replacement,
            e.g. {get_client: lambda: telegram_mock}.

    Returns:
        FastAPI: A configured FastAPI application.

    Example:
        app = create_test_app(telegram.router, {get_client: lambda: client_mock})
    """
    app = FastAPI()

    from api.dependencies.rate_limits import setup_rate_limiter

    setup_rate_limiter(app)

    if not isinstance(routers, list):
        routers = [routers]
    for router in routers:
        app.include_router(router)

    if dependency_overrides:
        app.dependency_overrides.update(dependency_overrides)

    return app


async def rate_limiting_helper(
    app,
    endpoint: str,
    request_limit: int,
    method: str = "get",
    expected_status: int = 200,
    headers: Optional[dict] = None,
    json: Optional[Any] = None,
):
    """
    Helper function to test rate limiting for an endpoint.

    Args:
        app: The FastAPI app instance.
        endpoint: The endpoint to test.
        request_limit: Number of requests allowed before rate limiting.
        method: HTTP method to use (e.g., "get", "post").
        expected_status: Expected status code for requests under the limit.
        headers: Optional headers to include in the requests.
        json: Optional JSON body sent with every request.
    """
    transport = httpx.ASGITransport(app=app)
    headers = headers or {}
    kwargs: Dict[str, Any] = {"headers": headers}
    if json is not None:
        kwargs["json"] = json

    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        http_method = getattr(client, method.lower())

        for i in range(request_limit):
            response = await http_method(endpoint, **kwargs)
            assert (
                response.status_code == expected_status
            ), f"Request {i+1} failed with status {response.status_code}"

        # The next request should be rate limited
        response = await http_method(endpoint, **kwargs)
        assert response.status_code == 429, "Expected rate limiting to trigger"
        assert response.json() == {"message": "Rate limit exceeded"}
