"""
Async HTTP transport for ghsource.

Handles async HTTP communication with GitHub, the caching proxy and the raw
content host using httpx, and turns error responses into typed exceptions.
Requests are never retried here; retry policy belongs to the caller.
"""

import time
from typing import Any

import httpx

from ghsource.config import SourceSettings
from ghsource.exceptions import (
    AuthenticationError,
    AuthorizationError,
    HTTPStatusError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    TransportError,
    ValidationError,
)
from ghsource.logging import log_http_request, log_http_response

GITHUB_JSON = "application/vnd.github+json"


class AsyncHTTPTransport:
    """
    Async HTTP transport layer shared by all resolver clients.

    Handles:
    - Token authentication for GitHub API requests
    - Request/response debug logging with tokens masked
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        settings: SourceSettings,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            settings: Endpoints, token and timeout
            http_transport: Optional httpx transport (tests pass an httpx.MockTransport)
        """
        self.settings = settings
        self.timeout = settings.timeout

        self._client = httpx.AsyncClient(
            timeout=settings.timeout,
            headers={"User-Agent": "ghsource"},
            transport=http_transport,
            follow_redirects=True,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def github_url(self, path: str) -> str:
        """Absolute GitHub API URL for a path like ``/repos/o/r``."""
        return self.settings.github_api_url + path

    def _headers(self, url: str, token: str | None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if url.startswith(self.settings.github_api_url):
            headers["Accept"] = GITHUB_JSON
            token = token or self.settings.token
        if token:
            headers["Authorization"] = f"token {token}"
        return headers

    async def request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
        token: str | None = None,
    ) -> httpx.Response:
        """
        Make a request and return the response whatever its status.

        Args:
            method: HTTP method
            url: Absolute URL
            params: Query parameters
            body: JSON request body (for POST/PATCH)
            token: Token overriding the configured one

        Returns:
            The httpx response

        Raises:
            TransportError: If no response was received
        """
        headers = self._headers(url, token)
        log_http_request(method, url, headers=headers, body=body)

        started = time.monotonic()
        try:
            response = await self._client.request(
                method, url, params=params, json=body, headers=headers
            )
        except httpx.RequestError as e:
            raise TransportError("CONNECTION_ERROR", f"{method} {url}: {e}") from e

        log_http_response(
            response.status_code, url, elapsed_ms=(time.monotonic() - started) * 1000
        )
        return response

    async def get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        token: str | None = None,
    ) -> Any:
        """
        GET a JSON document.

        Raises:
            HTTPStatusError: On error responses (typed by status code)
            TransportError: On network failure or a body that is not JSON
        """
        response = await self.request("GET", url, params=params, token=token)
        if response.status_code >= 400:
            raise self._parse_error_response(response)
        try:
            return response.json()
        except ValueError as e:
            raise TransportError("BAD_RESPONSE", f"GET {url}: invalid JSON") from e

    async def get_text(self, url: str, token: str | None = None) -> str:
        """
        GET a text document.

        Raises:
            HTTPStatusError: On error responses (typed by status code)
            TransportError: On network failure
        """
        response = await self.request("GET", url, token=token)
        if response.status_code >= 400:
            raise self._parse_error_response(response)
        return response.text

    def _parse_error_response(self, response: httpx.Response) -> HTTPStatusError:
        """
        Parse an error response into a typed exception.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate HTTPStatusError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        status_code = response.status_code
        message = data.get("message") or f"HTTP {status_code}"
        code = f"HTTP_{status_code}"
        request_id = response.headers.get("X-GitHub-Request-Id")

        if status_code == 401:
            return AuthenticationError(code, message, status_code, request_id)
        elif status_code == 403:
            return AuthorizationError(code, message, status_code, request_id)
        elif status_code == 404:
            return NotFoundError(code, message, status_code, request_id)
        elif status_code == 429:
            retry_after_str = response.headers.get("Retry-After", "60")
            try:
                retry_after = int(retry_after_str)
            except ValueError:
                retry_after = 60
            return RateLimitedError(code, message, status_code, retry_after, request_id)
        elif status_code >= 500:
            return ServerError(code, message, status_code, request_id)
        else:
            return ValidationError(code, message, status_code, request_id)
