"""
Async HTTP transport for mrstat.

Handles authenticated GET requests against a project-scoped review API,
JSON decoding and error handling using the httpx async client.
"""

import time
from typing import Any

import httpx

from mrstat.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DecodeError,
    HTTPError,
    NotFoundError,
    ServerError,
    TransportError,
)
from mrstat.logging import log_http_request, log_http_response, mask_sensitive_data


class AsyncHTTPTransport:
    """
    Async HTTP transport layer with bearer-token authentication.

    Handles:
    - ``Authorization: Bearer`` header on every request
    - Query parameter serialization
    - Request/response diagnostics on the ``mrstat.http`` logger
    - Error response parsing into typed exceptions

    There is no retry: every failure is raised to the caller on the first attempt.
    """

    def __init__(
        self,
        base_url: str,
        api_token: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://gitlab.com/api/v4/projects/42")
            api_token: Token sent as ``Authorization: Bearer <token>``
            timeout: Request timeout in seconds
            transport: Optional httpx transport (e.g. ``httpx.MockTransport`` in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={
                "Accept": "application/json",
                "Authorization": f"Bearer {api_token}",
            },
            transport=transport,
        )

    def __repr__(self) -> str:
        return f"AsyncHTTPTransport(base_url={self.base_url!r})"

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make an authenticated GET request.

        Args:
            path: API path relative to the base URL (e.g., "/merge_requests")
            params: Query parameters

        Returns:
            Parsed JSON response

        Raises:
            TransportError: If the server cannot be reached
            HTTPError: If the response status is outside 200-299
            DecodeError: If the body is not well-formed JSON
        """
        log_url = self._log_url(path, params)
        log_http_request("GET", log_url, dict(self._client.headers))

        started = time.monotonic()
        try:
            response = await self._client.get(path, params=params)
        except httpx.RequestError as e:
            raise TransportError(
                mask_sensitive_data(f"GET {log_url} failed: {e}")
            ) from e

        elapsed_ms = (time.monotonic() - started) * 1000
        log_http_response(response.status_code, log_url, len(response.content), elapsed_ms)

        if not response.is_success:
            raise self._parse_error_response(response, log_url)

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"GET {log_url} returned malformed JSON: {e}") from e

    @staticmethod
    def _log_url(path: str, params: dict[str, Any] | None) -> str:
        """Path and query as shown in diagnostics (no host, no credentials)."""
        if not params:
            return path
        return f"{path}?{httpx.QueryParams(params)}"

    def _parse_error_response(self, response: httpx.Response, log_url: str) -> HTTPError:
        """
        Parse an error response into a typed exception.

        Args:
            response: HTTP response with error status
            log_url: Request path used in the error message

        Returns:
            Appropriate HTTPError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}

        detail = ""
        if isinstance(data, dict):
            detail = data.get("message") or data.get("error") or ""
        message = f"statusCode={response.status_code} for GET {log_url}"
        if detail:
            message = f"{message}: {detail}"
        message = mask_sensitive_data(message)

        status_code = response.status_code

        if status_code == 401:
            return AuthenticationError(status_code, message, "UNAUTHORIZED")
        elif status_code == 403:
            return AuthorizationError(status_code, message, "FORBIDDEN")
        elif status_code == 404:
            return NotFoundError(status_code, message, "NOT_FOUND")
        elif status_code >= 500:
            return ServerError(status_code, message, "SERVER_ERROR")
        else:
            return HTTPError(status_code, message)
