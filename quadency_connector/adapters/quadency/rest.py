"""
Quadency REST transport.

Sends requests produced by QuadencySigner and returns the raw status, text
and parsed JSON. Implements simple rate limiting to avoid venue bans.
Error interpretation is left to QuadencyErrorMapper.

Endpoints:
    Public base URL:  https://quadency.com/api/v1/public/quadx
    Private base URL: https://quadency.com/api/v1/private/quadx

Rate Limits:
    - Quadency: 1 request per second per key
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp
import structlog

from quadency_connector.adapters.quadency.signer import SignedRequest

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Raw HTTP response: status code, body text and parsed JSON (or None)."""

    status: int
    body: str
    data: Optional[Any]


class QuadencyRestClient:
    """
    Async REST client for Quadency.

    Attributes:
        rate_limit_per_second: Maximum requests per second.
        timeout_seconds: Total request timeout.

    Example:
        >>> client = QuadencyRestClient(rate_limit_per_second=1)
        >>> response = await client.send(signer.sign("markets"))
        >>> print(response.status, response.data)
        >>> await client.close()
    """

    def __init__(
        self,
        rate_limit_per_second: int = 1,
        timeout_seconds: int = 10,
    ):
        """
        Initialize REST client.

        Args:
            rate_limit_per_second: Maximum requests per second.
            timeout_seconds: Request timeout in seconds.
        """
        self.rate_limit_per_second = rate_limit_per_second
        self.timeout_seconds = timeout_seconds

        self._session: Optional[aiohttp.ClientSession] = None
        self._last_request_time: float = 0.0
        self._request_interval = 1.0 / rate_limit_per_second
        self._throttle_lock = asyncio.Lock()

        logger.info(
            "rest_client_initialized",
            exchange="quadency",
            rate_limit=rate_limit_per_second,
        )

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session is created."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                headers={"User-Agent": "quadency-connector/0.1"},
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("rest_client_session_closed", exchange="quadency")

    async def _rate_limit(self) -> None:
        """
        Apply rate limiting using simple time-based throttling.

        Ensures minimum interval between requests.
        """
        async with self._throttle_lock:
            loop = asyncio.get_running_loop()
            time_since_last = loop.time() - self._last_request_time

            if time_since_last < self._request_interval:
                await asyncio.sleep(self._request_interval - time_since_last)

            self._last_request_time = loop.time()

    async def send(self, request: SignedRequest) -> HttpResponse:
        """
        Send a request and read the whole response.

        Args:
            request: URL, method, body and headers from the signer.

        Returns:
            HttpResponse: Status, text and parsed JSON (None if not JSON).

        Raises:
            ConnectionError: If the request fails or times out.
        """
        await self._rate_limit()

        session = await self._ensure_session()

        try:
            async with session.request(
                request.method,
                request.url,
                data=request.body,
                headers=request.headers,
            ) as response:
                body = await response.text()
                status = response.status
        except aiohttp.ClientError as e:
            logger.error(
                "rest_client_error",
                exchange="quadency",
                method=request.method,
                url=request.url,
                error=str(e),
            )
            raise ConnectionError(f"REST request failed: {e}")
        except asyncio.TimeoutError:
            logger.error(
                "rest_timeout",
                exchange="quadency",
                url=request.url,
                timeout=self.timeout_seconds,
            )
            raise ConnectionError(f"REST request timeout after {self.timeout_seconds}s")

        try:
            data = json.loads(body) if body else None
        except ValueError:
            data = None

        logger.debug(
            "rest_response",
            exchange="quadency",
            method=request.method,
            url=request.url,
            status=status,
        )

        return HttpResponse(status=status, body=body, data=data)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"QuadencyRestClient(rate_limit={self.rate_limit_per_second}/s)"
