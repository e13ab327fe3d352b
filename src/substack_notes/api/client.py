"""Substack API client using httpx.

Provides authenticated access to Substack API endpoints
with client-side rate limiting and error handling.
"""

from __future__ import annotations

import asyncio
import logging
import time
from types import TracebackType
from typing import Any, Self

import httpx

from substack_notes.config import get_max_requests_per_second, get_timeout
from substack_notes.models import DEFAULT_HOSTNAME, ErrorCode, Session, SubstackAPIError

logger = logging.getLogger(__name__)

# Name of the authentication cookie
AUTH_COOKIE_NAME = "substack.sid"

USER_AGENT = "substack-notes/0.1.0"

# Rate limiting window size in seconds
RATE_LIMIT_WINDOW = 1.0


class SubstackAPIClient:
    """HTTP client for the Substack API.

    Provides authenticated requests with rate limiting and error handling.
    Use as async context manager for proper resource management.

    Attributes:
        session: User session with the authentication token
        base_url: Base URL requests are sent to
        max_requests_per_second: Client-side rate limit
    """

    def __init__(
        self,
        session: Session | None = None,
        base_url: str | None = None,
        max_requests_per_second: int | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize API client.

        Args:
            session: User session for authentication (optional for public endpoints)
            base_url: Override for the base URL (default: https://{session.hostname})
            max_requests_per_second: Override for SUBSTACK_MAX_REQUESTS_PER_SECOND
            timeout: Override for SUBSTACK_TIMEOUT (seconds)
        """
        self.session = session
        hostname = session.hostname if session is not None else DEFAULT_HOSTNAME
        self.base_url = base_url or f"https://{hostname}"
        self.max_requests_per_second = max_requests_per_second or get_max_requests_per_second()
        self._timeout = timeout or get_timeout()
        self._client: httpx.AsyncClient | None = None
        self._request_times: list[float] = []

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self._timeout),
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context manager."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_headers(self, include_content_type: bool = False) -> dict[str, str]:
        """Build request headers with authentication.

        Args:
            include_content_type: Whether to add a JSON Content-Type header

        Returns:
            Headers dictionary with Accept and Cookie if session exists
        """
        headers: dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

        if self.session is not None:
            headers["Cookie"] = f"{AUTH_COOKIE_NAME}={self.session.token}"

        if include_content_type:
            headers["Content-Type"] = "application/json"

        return headers

    async def _check_rate_limit(self) -> None:
        """Wait until a request may be sent without exceeding the rate limit."""
        while True:
            now = time.monotonic()
            window_start = now - RATE_LIMIT_WINDOW
            self._request_times = [t for t in self._request_times if t > window_start]

            if len(self._request_times) < self.max_requests_per_second:
                return

            delay = self._request_times[0] - window_start
            logger.debug("Rate limit reached, waiting %.3fs", delay)
            await asyncio.sleep(delay)

    def _track_request(self) -> None:
        """Track a request for rate limiting."""
        self._request_times.append(time.monotonic())

    def _handle_error_response(self, response: httpx.Response) -> None:
        """Handle error responses from the API.

        Args:
            response: HTTP response object

        Raises:
            SubstackAPIError: With appropriate error code
        """
        status = response.status_code
        reason = response.reason_phrase
        details: dict[str, object] = {"status_code": status, "response": response.text}

        if status == 401:
            code = ErrorCode.NOT_AUTHENTICATED
        elif status == 404:
            code = ErrorCode.NOT_FOUND
        elif status == 429:
            code = ErrorCode.RATE_LIMITED
        else:
            code = ErrorCode.API_ERROR

        raise SubstackAPIError(code=code, message=f"HTTP {status}: {reason}", details=details)

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        if self._client is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        await self._check_rate_limit()
        self._track_request()

        headers = self._build_headers(include_content_type=json is not None)
        logger.debug("%s %s", method, path)
        response = await self._client.request(method, path, headers=headers, params=params, json=json)

        if not response.is_success:
            self._handle_error_response(response)

        try:
            result: dict[str, Any] = response.json()
        except ValueError as e:
            raise SubstackAPIError(
                code=ErrorCode.API_ERROR,
                message=f"HTTP {response.status_code}: response is not valid JSON",
                details={"status_code": response.status_code, "response": response.text},
            ) from e
        return result

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make a GET request to the API.

        Args:
            path: API endpoint path (e.g., "/api/v1/feed/following")
            params: Query parameters

        Returns:
            JSON response as dictionary

        Raises:
            SubstackAPIError: If request fails
        """
        return await self._request("GET", path, params=params)

    async def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make a POST request to the API.

        Args:
            path: API endpoint path
            json: JSON body

        Returns:
            JSON response as dictionary

        Raises:
            SubstackAPIError: If request fails
        """
        return await self._request("POST", path, json=json)

    async def put(
        self,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make a PUT request to the API.

        Args:
            path: API endpoint path
            json: JSON body

        Returns:
            JSON response as dictionary

        Raises:
            SubstackAPIError: If request fails
        """
        return await self._request("PUT", path, json=json)
