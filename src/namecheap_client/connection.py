"""
Namecheap Connection

Performs HTTP GET requests against the Namecheap API.
"""

import logging

import httpx

from namecheap_client.exceptions import NamecheapConnectionError

logger = logging.getLogger("namecheap.connection")

USER_AGENT = "namecheap-client/1.0.0"


def _wrap_error(e: httpx.HTTPError) -> NamecheapConnectionError:
    """Translate an httpx error into a NamecheapConnectionError."""
    if isinstance(e, httpx.HTTPStatusError):
        status = e.response.status_code
        return NamecheapConnectionError(
            f"HTTP {status} {e.response.reason_phrase}",
            status_code=status,
        )
    if isinstance(e, httpx.TimeoutException):
        return NamecheapConnectionError(f"Request timed out: {e}")
    return NamecheapConnectionError(f"HTTP error: {e}")


class APIConnection:
    """
    Synchronous HTTP transport.

    Handles:
    - One GET per call with a fresh httpx.Client
    - Timeout handling
    - Mapping network errors and non-2xx statuses to NamecheapConnectionError
    """

    def __init__(
        self,
        timeout: float = 30.0,
        verify: bool = True,
        transport: httpx.BaseTransport = None,
    ):
        """
        Initialize connection.

        Args:
            timeout: Request timeout in seconds
            verify: Whether to verify the server certificate
            transport: Optional httpx transport (used by tests)
        """
        self.timeout = timeout
        self.verify = verify
        self._transport = transport

    def get(self, url: str) -> bytes:
        """
        Send GET request and return the response body.

        Args:
            url: Full request URL

        Returns:
            Raw response body

        Raises:
            NamecheapConnectionError: On network error, timeout or HTTP error status
        """
        try:
            with httpx.Client(
                timeout=self.timeout,
                verify=self.verify,
                transport=self._transport,
                headers={"User-Agent": USER_AGENT},
            ) as client:
                response = client.get(url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise _wrap_error(e) from e

        logger.debug(f"Received {len(response.content)} bytes (HTTP {response.status_code})")
        return response.content


class AsyncAPIConnection:
    """
    Asynchronous HTTP transport.

    Same semantics as APIConnection. Cancelling the awaiting task aborts
    the in-flight request.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        verify: bool = True,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.timeout = timeout
        self.verify = verify
        self._transport = transport

    async def get(self, url: str) -> bytes:
        """Send GET request and return the response body."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                verify=self.verify,
                transport=self._transport,
                headers={"User-Agent": USER_AGENT},
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise _wrap_error(e) from e

        logger.debug(f"Received {len(response.content)} bytes (HTTP {response.status_code})")
        return response.content
