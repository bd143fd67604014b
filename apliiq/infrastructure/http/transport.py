import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from apliiq.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class TransportFailure(Exception):
    """Raised when a call could not complete or completed with a non-success status."""

    def __init__(self, message: str, status: Optional[int] = None, body: Any = None):
        self.message = message
        self.status = status
        self.body = body
        super().__init__(message)


@dataclass(frozen=True)
class TransportResponse:
    status: int
    body: Any

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    def raise_for_status(self) -> "TransportResponse":
        """
        Raise if the upstream status is not 2xx.

        Returns:
            The response itself, for chaining

        Raises:
            TransportFailure: Carrying the status and decoded body
        """
        if not self.is_success:
            raise TransportFailure(
                f"Request failed with status {self.status}",
                status=self.status,
                body=self.body,
            )
        return self


class HttpTransport:
    """
    Thin async HTTP transport for the Apliiq API.

    Performs a single request per call: no retries, no caching. Any
    ``httpx.Auth`` passed in runs on every request, after the body is final.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float,
        auth: Optional[httpx.Auth] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the transport.

        Args:
            base_url: API endpoint all paths are relative to
            timeout: Request timeout in seconds
            auth: Auth flow applied to each request
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            auth=auth,
            headers=DEFAULT_HEADERS,
            transport=transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> TransportResponse:
        """
        Perform one request.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            body: Serialized JSON body, sent as-is
            headers: Extra headers for this request

        Returns:
            TransportResponse: Status and decoded body

        Raises:
            TransportFailure: On timeout or connection failure
        """
        start_time = time.perf_counter()
        try:
            response = await self.client.request(method, path, content=body, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"Apliiq request timed out after {self.timeout}s: {method} {path}")
            raise TransportFailure(f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.error(f"Apliiq request failed: {method} {path}: {e}")
            raise TransportFailure(f"Connection error: {e}") from e

        duration = time.perf_counter() - start_time
        logger.debug(
            f"Apliiq {method} {path} completed in {duration:.2f}s",
            extra={"data": {"method": method, "path": path, "status_code": response.status_code}},
        )
        return TransportResponse(status=response.status_code, body=self._decode(response))

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def aclose(self) -> None:
        await self.client.aclose()
